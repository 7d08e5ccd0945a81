# app.py
import logging
import json
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from asyncio import Lock

from config import DEBUG, get_env_var, load_config
from agents.extraction_agent import PydanticAICompletionService, build_google_model
from core.intent import ActionRequest
from core.outcome import FailureKind
from executors.registry import ActionRegistry, build_registry
from services.signer import get_signer
from services.sui_client import SuiExecutionClient
from services.sui_registry import SuiTokenRegistry
from services.sui_rpc import SuiRpcClient
from services.utils import deep_serialize


# -----------------------------
# Failure kind → HTTP status (SINGLE SOURCE OF TRUTH)
# -----------------------------
FAILURE_STATUS = {
    FailureKind.EXTRACTION_FAILURE: 502,
    FailureKind.INVALID_INTENT: 422,
    FailureKind.UNSUPPORTED_NETWORK: 409,
    FailureKind.TOKEN_NOT_FOUND: 404,
    FailureKind.EXECUTION_FAILURE: 502,
    FailureKind.ACTION_UNAVAILABLE: 503,
    FailureKind.INTERNAL_ERROR: 500,
}

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
                "exception": (
                    self.formatException(record.exc_info) if record.exc_info else None
                ),
            }
        )


logger = logging.getLogger("sui_intent_api")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
if not logger.handlers:
    logger.addHandler(handler)

# -----------------------------
# FastAPI App
# -----------------------------
app = FastAPI(title="Sui Intent API", version="1.0")

# -----------------------------
# Executors (Lifecycle managed)
# -----------------------------
actions: ActionRegistry | None = None
STARTUP_ERROR: str | None = None

# -----------------------------
# Metrics
# -----------------------------
metrics_lock = Lock()
request_counters: Dict[str, int] = {
    "total": 0,
    "success": 0,
    "failed": 0,
    "errors": 0,
}

# -----------------------------
# Pydantic Models
# -----------------------------
class UserRequest(BaseModel):
    text: str
    user_id: str


def error_envelope(error_type: str, message: str, data: Any = None) -> Dict[str, Any]:
    return {"error": {"type": error_type, "message": message, "data": data}}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        body = detail
    else:
        body = error_envelope("HTTPError", str(detail))
    return JSONResponse(status_code=exc.status_code, content=body)

# -----------------------------
# Startup Events
# -----------------------------
@app.on_event("startup")
async def startup():
    global actions, STARTUP_ERROR

    try:
        config = load_config()
        rpc = SuiRpcClient(config.fullnode_url)
        completion = PydanticAICompletionService(
            build_google_model(config.model_name, get_env_var("GOOGLE_API_KEY"))
        )
        actions = build_registry(
            config,
            completion,
            SuiTokenRegistry(rpc),
            SuiExecutionClient(rpc, gas_budget=config.gas_budget),
            get_signer(),
        )
        STARTUP_ERROR = None
        logger.info(f"✅ Executors ready on {config.network}")

    except Exception as e:
        actions = None
        STARTUP_ERROR = str(e)
        logger.exception("❌ Failed to initialise executors")
        if DEBUG:
            raise

# -----------------------------
# API Endpoints
# -----------------------------
@app.get("/")
async def root():
    return {"message": "Sui Intent API is running."}


@app.get("/health")
async def health() -> Dict[str, Any]:
    info = {"status": "ok", "executors_ready": actions is not None}
    if STARTUP_ERROR:
        info["startup_error"] = STARTUP_ERROR
    return info


@app.get("/metrics")
async def metrics() -> Dict[str, Any]:
    async with metrics_lock:
        return request_counters.copy()


@app.get("/actions")
async def list_actions():
    if actions is None:
        raise HTTPException(
            status_code=503,
            detail=error_envelope("ServiceUnavailable", "Executors are not initialised"),
        )
    return {"actions": actions.describe()}


@app.post("/actions/{action_name}")
async def run_action(action_name: str, request: UserRequest):
    async with metrics_lock:
        request_counters["total"] += 1

    if actions is None:
        raise HTTPException(
            status_code=503,
            detail=error_envelope("ServiceUnavailable", "Executors are not initialised"),
        )

    executor = actions.get(action_name)
    if executor is None:
        raise HTTPException(
            status_code=404,
            detail=error_envelope("UnknownAction", f"Unknown action: {action_name}"),
        )

    action_request = ActionRequest(
        user_id=request.user_id,
        raw_input=request.text,
        action=executor.name,
    )
    logger.info(
        f"[REQUEST_START] user_id={action_request.user_id}, "
        f"action={action_request.action}, text_length={len(action_request.raw_input)}"
    )

    try:
        outcome = await executor.execute(action_request.raw_input)
    except Exception as e:
        async with metrics_lock:
            request_counters["errors"] += 1
        logger.exception(f"[ERROR] user_id={request.user_id}, exception={e}")
        raise HTTPException(
            status_code=500,
            detail=error_envelope(
                FailureKind.INTERNAL_ERROR.value,
                str(e) if DEBUG else "An unexpected error occurred",
            ),
        )

    async with metrics_lock:
        request_counters[action_request.action] = request_counters.get(action_request.action, 0) + 1
        request_counters["success" if outcome.success else "failed"] += 1

    logger.info(
        f"[OUTCOME] user_id={action_request.user_id}, action={action_request.action}, "
        f"success={outcome.success}, kind={outcome.kind}"
    )

    if outcome.success:
        return {
            "type": action_request.action,
            "data": deep_serialize(outcome.content),
            "message": outcome.text,
        }

    return JSONResponse(
        status_code=FAILURE_STATUS.get(outcome.kind, 500),
        content=error_envelope(
            outcome.kind.value if outcome.kind else FailureKind.INTERNAL_ERROR.value,
            outcome.text,
            deep_serialize(outcome.content),
        ),
    )


# -----------------------------
# Entrypoint
# -----------------------------
import os
import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("API_LAYER.app:app", host="0.0.0.0", port=port, workers=1)
