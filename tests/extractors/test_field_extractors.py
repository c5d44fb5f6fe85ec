from services.extractors import (
    extract_destination_country,
    extract_recipient,
    extract_reference,
    extract_urgency,
)

# ---------------------------------------------------------------------
# Recipient
# ---------------------------------------------------------------------

def test_vendor_id_marker():
    assert extract_recipient("send to vendor_id:4421") == "4421"


def test_relationship_keyword_keeps_possessive():
    recipient = extract_recipient("pay my sister")
    assert "sister" in recipient
    assert recipient == "my sister"


def test_relationship_keyword_without_my():
    assert extract_recipient("send 200 to contractor in Nigeria") == "contractor"


def test_two_word_name_after_to():
    assert extract_recipient("send to John Smith") == "John Smith"


def test_name_after_to_stops_at_lowercase_word():
    assert extract_recipient("send $500 to John in Manila") == "John"


def test_first_capitalized_name_skips_verbs():
    assert extract_recipient("Transfer 300 dollars Maria Lopez") == "Maria Lopez"


def test_lowercase_word_after_to():
    assert extract_recipient("send money to bob") == "bob"


def test_no_recipient():
    assert extract_recipient("send money") is None


# ---------------------------------------------------------------------
# Destination country
# ---------------------------------------------------------------------

def test_city_resolves_to_country():
    assert extract_destination_country("send money to John in Manila") == "PH"


def test_country_name_after_in():
    assert extract_destination_country("send to Ahmed in Morocco") == "MA"
    assert extract_destination_country("send to contractor in Nigeria") == "NG"


def test_uppercase_code():
    assert extract_destination_country("send to PH") == "PH"


def test_lowercase_two_letters_are_not_codes():
    assert extract_destination_country("send 100 to ph") is None


def test_lowercase_city_found_by_word_scan():
    assert extract_destination_country("wire 200 euros to lagos") == "NG"


def test_multi_word_country():
    assert extract_destination_country("send to Maria in South Africa") == "ZA"
    assert extract_destination_country("send 100 to my brother in united arab emirates") == "AE"


def test_no_country():
    assert extract_destination_country("send money") is None
    assert extract_destination_country("send some money to my friend") is None


def test_shouted_words_are_not_country_codes():
    assert extract_destination_country("pay ID 4421 to Bob") is None
    assert extract_destination_country("SEND IT NOW") is None


# ---------------------------------------------------------------------
# Urgency
# ---------------------------------------------------------------------

def test_high_urgency_keywords():
    assert extract_urgency("send money urgent") == "high"
    assert extract_urgency("send money asap") == "high"
    assert extract_urgency("send money right now") == "high"
    assert extract_urgency("EMERGENCY transfer to mom") == "high"


def test_standard_when_no_keyword():
    assert extract_urgency("send money") == "standard"


def test_configured_default_urgency(loaded_config):
    loaded_config(DEFAULT_URGENCY="high")
    assert extract_urgency("send money") == "high"


# ---------------------------------------------------------------------
# Reference
# ---------------------------------------------------------------------

def test_invoice_reference():
    assert extract_reference("pay invoice INV-2024-089") == "INV-2024-089"


def test_ref_with_colon():
    assert extract_reference("send 100 with ref: ABC123") == "ABC123"


def test_full_reference_word():
    assert extract_reference("reference XYZ-9") == "XYZ-9"


def test_vendor_marker_is_a_reference():
    assert extract_reference("pay vendor_id:4421") == "4421"


def test_no_reference():
    assert extract_reference("send money") is None
