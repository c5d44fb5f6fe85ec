import io
import json

from main import format_intent, main
from services.intent_parser import parse_intent


def test_json_output_envelope(capsys):
    exit_code = main(["--json", "send $500 to John in Manila"])

    assert exit_code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["success"] is True
    assert body["raw_input"] == "send $500 to John in Manila"
    assert body["intent"]["corridor"] == "USD-PHP"
    assert body["parsed_at"].endswith("Z")


def test_unquoted_words_are_joined(capsys):
    assert main(["-j", "pay", "my", "sister", "200", "euros"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["intent"]["amount"] == 200.0
    assert body["intent"]["currency"] == "EUR"


def test_human_readable_payment(capsys):
    assert main(["send some money to my friend"]) == 0
    out = capsys.readouterr().out
    assert "Parsed Payment Intent" in out
    assert "💰 Amount: (not specified)" in out
    assert "❓ How much would you like to send and in what currency?" in out


def test_reads_stdin_when_no_arguments(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("show my payment history\n"))
    assert main([]) == 0
    assert "History Query" in capsys.readouterr().out


def test_no_input_is_an_error(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 1
    assert "No input provided" in capsys.readouterr().err


def test_parse_error_exits_with_one(monkeypatch, capsys):
    monkeypatch.setenv("MAX_INPUT_LENGTH", "5")
    assert main(["send $500 to John"]) == 1
    assert "maximum length of 5" in capsys.readouterr().err


def test_format_status_query_without_identifier():
    text = format_intent(parse_intent("what is the status of my payment"))
    assert "Status Query" in text
    assert "No specific identifier found" in text


def test_format_list_query_shows_filters():
    text = format_intent(parse_intent("show pending payments"))
    assert "📋 Entity Type: payments" in text
    assert "📊 Status: pending" in text
