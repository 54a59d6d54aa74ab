from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from rulekit.config import ValidatorSettings, load_settings
from rulekit.errors import RuleConstructionError
from rulekit.logging_config import setup_logging
from rulekit.rule_validator import RuleValidator


class ValidateRequest(BaseModel):
    value: Any = None
    rules: str
    strict: Optional[bool] = None


class ValidateResponse(BaseModel):
    passed: bool
    errors: Dict[str, str]
    unresolved: List[str]
    processing_time_ms: Optional[float] = None


def create_app(settings: Optional[ValidatorSettings] = None) -> FastAPI:
    """
    Build the validation service.

    Args:
        settings: Validator settings (loaded from RULEKIT_CONFIG, .env and
            RULEKIT_* variables when omitted)
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_format)

    # Each request uses check(), so no error map is shared between requests.
    validator = RuleValidator(settings=settings)

    app = FastAPI(title="RuleKit Validator")
    app.state.validator = validator

    @app.post("/validate", response_model=ValidateResponse)
    async def validate(req: ValidateRequest):
        try:
            result = validator.engine.check(req.value, req.rules, strict=req.strict)
        except RuleConstructionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return ValidateResponse(
            passed=result.passed,
            errors=result.errors,
            unresolved=result.unresolved,
            processing_time_ms=result.processing_time_ms,
        )

    @app.get("/rules")
    async def rules():
        return {"rules": validator.rule_names()}

    @app.get("/metrics", response_class=PlainTextResponse)
    async def metrics():
        if validator.metrics is None:
            raise HTTPException(status_code=404, detail="Metrics are disabled")
        return validator.metrics.export_text()

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
