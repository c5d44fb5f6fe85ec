# app.py
import logging
import json
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import load_config
from core.errors import ConfigurationUnavailableError, EmptyInputError, InputTooLongError
from services.intent_parser import parse_intent_enhanced
from services.utils import error_envelope, success_envelope, utc_timestamp

SERVICE_NAME = "intent-parser"

# -----------------------------
# Structured Logging Setup
# -----------------------------
class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "exception": record.exc_text,
            }
        )


logger = logging.getLogger("intent_parser_api")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
if not logger.handlers:
    logger.addHandler(handler)

# -----------------------------
# FastAPI App
# -----------------------------
app = FastAPI(title="Payment Intent Parser API", version="1.0")

# -----------------------------
# Pydantic Models
# -----------------------------
class ParseRequest(BaseModel):
    input: str

# -----------------------------
# Startup
# -----------------------------
@app.on_event("startup")
async def startup():
    try:
        config = load_config()
    except ConfigurationUnavailableError:
        # Extractors fall back to their defaults; keep serving
        logger.exception("❌ Invalid configuration, running with defaults")
        return

    logger.setLevel(config.log_level)
    logger.info(
        f"✅ Config loaded: env={config.environment}, llm_enabled={config.llm_enabled}, "
        f"llm_provider={config.llm_provider}"
    )

# -----------------------------
# Error Handlers
# -----------------------------
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[INVALID_REQUEST] path={request.url.path}, errors={exc.errors()}")
    body = error_envelope("Invalid request", "Body must be a JSON object with a string 'input' field")
    return JSONResponse(status_code=400, content=body)

# -----------------------------
# API Endpoints
# -----------------------------
@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "service": SERVICE_NAME, "timestamp": utc_timestamp()}


@app.post("/parse")
async def parse(request: ParseRequest, format: Optional[str] = None):
    logger.info(f"[REQUEST_START] path=/parse, input_length={len(request.input)}")

    try:
        intent = await parse_intent_enhanced(request.input)
    except (EmptyInputError, InputTooLongError) as e:
        logger.warning(f"[INVALID_INPUT] {e}")
        return JSONResponse(status_code=400, content=error_envelope("Invalid request", str(e)))
    except Exception as e:
        logger.exception(f"[ERROR] exception={e}")
        return JSONResponse(status_code=500, content=error_envelope("Internal server error", str(e)))

    logger.info(f"[INTENT] type={intent.type}, confidence={intent.confidence}")
    return success_envelope(intent, raw_input=request.input, legacy=(format == "legacy"))


# -----------------------------
# Entrypoint
# -----------------------------
import uvicorn

if __name__ == "__main__":
    config = load_config()
    uvicorn.run(app, host=config.host, port=config.port, workers=1)
