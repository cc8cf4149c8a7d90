import json
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

FieldKind = Literal["text", "email", "tel", "textarea", "select"]
ErrorKind = Literal["validation", "delivery", "internal"]

# Fixed ticket fields; a custom field may not redefine them
RESERVED_FIELD_KEYS = ("name", "issue", "priority", "category")


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class BrandConfig(FrozenModel):
    """Brand identity shown in the UI header and the email body."""
    name: str
    primary_color: str
    secondary_color: str
    tagline: str
    logo_url: Optional[str] = None


class SmtpAuth(FrozenModel):
    user: str = ""
    # "pass" is a keyword; the config key stays "pass"
    password: str = Field(default="", alias="pass")

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SmtpConfig(FrozenModel):
    host: str
    port: int
    secure: bool = False
    auth: SmtpAuth = SmtpAuth()

    @property
    def has_credentials(self) -> bool:
        return bool(self.auth.user) and bool(self.auth.password)


class FieldConfig(FrozenModel):
    """One extra form field beyond the fixed name + issue pair."""
    key: str
    label: str
    type: FieldKind = "text"
    placeholder: str = ""
    required: bool = False
    options: Optional[Tuple[str, ...]] = None


class AppConfig(FrozenModel):
    """The effective configuration for one server instance."""
    brand: BrandConfig
    smtp: SmtpConfig
    support_email: str
    email_subject_template: str
    custom_fields: Tuple[FieldConfig, ...] = ()
    priorities: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _unique_field_keys(self) -> "AppConfig":
        seen = set()
        for field in self.custom_fields:
            if field.key in RESERVED_FIELD_KEYS:
                raise ValueError(f"custom field key '{field.key}' is reserved")
            if field.key in seen:
                raise ValueError(f"duplicate custom field key '{field.key}'")
            seen.add(field.key)
        return self


class FieldDescriptor(FrozenModel):
    type: Literal["string"] = "string"
    required: bool
    description: str


class EmailDraft(FrozenModel):
    to: str
    subject: str
    body: str
    reply_to: Optional[str] = None


class DeliveryOutcome(FrozenModel):
    success: bool
    message: str


class ToolResponse(BaseModel):
    """Result of one ticket submission, ready for any transport."""
    payload: Dict[str, Any]
    is_error: bool = False
    error_kind: Optional[ErrorKind] = None

    @property
    def text(self) -> str:
        return json.dumps(self.payload)
