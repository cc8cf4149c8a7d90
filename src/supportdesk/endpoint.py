# src/supportdesk/endpoint.py
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from . import composer
from .errors import DeliveryError, TicketValidationError
from .logger import get_logger
from .mailer import Dispatcher
from .models import AppConfig, ToolResponse
from .schema import build_input_model

logger = get_logger(__name__)

TOOL_NAME = "customer_support"
DEFAULT_PRIORITY = "Medium"
DEFAULT_CATEGORY = "General Inquiry"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TicketEndpoint:
    """
    The customer_support operation: validate -> compose -> dispatch.
    submit() never raises; every failure becomes an error payload.
    """

    def __init__(self, config: AppConfig, dispatcher: Optional[Dispatcher] = None,
                 clock: Callable[[], str] = utc_timestamp):
        self.config = config
        self.dispatcher = dispatcher or Dispatcher(config)
        self.clock = clock
        self.input_model = build_input_model(config)

    def validate_input(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate a raw payload against the config-derived contract."""
        try:
            validated = self.input_model.model_validate(dict(raw))
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            missing = [f for f, err in zip(fields, e.errors()) if err["type"] == "missing"]
            if missing and len(missing) == len(fields):
                message = f"Missing required field(s): {', '.join(missing)}"
            else:
                message = "Invalid ticket input: " + "; ".join(
                    f"{f}: {err['msg']}" for f, err in zip(fields, e.errors())
                )
            raise TicketValidationError(message, fields) from e
        return validated.model_dump(by_alias=True, exclude_none=True)

    def submit(self, raw: Any) -> ToolResponse:
        if not isinstance(raw, Mapping):
            return self._error("Ticket input must be an object of string fields.", "validation")

        try:
            ticket = self.validate_input(raw)
        except TicketValidationError as e:
            self._log("ticket_rejected", {"fields": list(e.fields), "reason": str(e)})
            return self._error(str(e), "validation")

        self._log("ticket_received", {"name": ticket["name"], "keys": sorted(ticket)})
        try:
            draft = composer.compose(ticket, self.config)
            outcome = self.dispatcher.dispatch(draft)
        except DeliveryError as e:
            self._log("ticket_failed", {"kind": "delivery", "error": str(e)})
            return self._error(str(e), "delivery")
        except Exception as e:
            logger.exception("❌ Ticket submission failed")
            return self._error(str(e), "internal")

        self._log("ticket_dispatched", {"success": outcome.success, "message": outcome.message})
        payload = {
            "status": "ok" if outcome.success else "error",
            "message": outcome.message,
            "ticket": {
                "name": ticket["name"],
                "issue": ticket["issue"],
                "priority": ticket.get("priority", DEFAULT_PRIORITY),
                "category": ticket.get("category", DEFAULT_CATEGORY),
                "timestamp": self.clock(),
            },
        }
        return ToolResponse(payload=payload)

    def _error(self, message: str, kind: str) -> ToolResponse:
        return ToolResponse(
            payload={"status": "error", "message": message},
            is_error=True,
            error_kind=kind,
        )

    def _log(self, event: str, payload: Dict[str, Any]):
        logger.info("%s %s", event, payload)
