# src/supportdesk/schema.py
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from .models import AppConfig, FieldDescriptor


def build_input_schema(config: AppConfig) -> Dict[str, FieldDescriptor]:
    """
    Field contract for the customer_support tool.

    name and issue are always required. priority and category are always
    optional; their allowed values only appear in the description and are
    not enforced. Custom fields follow their own required flag.
    """
    shape: Dict[str, FieldDescriptor] = {
        "name": FieldDescriptor(required=True, description="Full name of the customer"),
        "issue": FieldDescriptor(required=True, description="Description of the customer's issue"),
        "priority": FieldDescriptor(
            required=False,
            description=f"Ticket priority level ({', '.join(config.priorities)})",
        ),
        "category": FieldDescriptor(
            required=False,
            description=f"Issue category ({', '.join(config.categories)})",
        ),
    }
    for field in config.custom_fields:
        shape[field.key] = FieldDescriptor(required=field.required, description=field.label)
    return shape


def input_json_schema(config: AppConfig) -> Dict[str, Any]:
    """JSON Schema advertised to tool callers."""
    shape = build_input_schema(config)
    return {
        "type": "object",
        "properties": {
            key: {"type": desc.type, "description": desc.description}
            for key, desc in shape.items()
        },
        "required": [key for key, desc in shape.items() if desc.required],
        "additionalProperties": True,
    }


def build_input_model(config: AppConfig) -> Type[BaseModel]:
    """
    Pydantic model validating raw ticket input.

    Keys are bound through aliases so a custom field key can never clash
    with a BaseModel attribute. Unknown keys are kept.
    """
    fields: Dict[str, Any] = {}
    for i, (key, desc) in enumerate(build_input_schema(config).items()):
        default = ... if desc.required else None
        annotation = str if desc.required else Optional[str]
        fields[f"field_{i}"] = (annotation, Field(default, alias=key, description=desc.description))
    return create_model(
        "TicketInput",
        __config__=ConfigDict(extra="allow", strict=True),
        **fields,
    )


def form_fields(config: AppConfig) -> List[Dict[str, Any]]:
    """Ordered field list the UI renders, derived from the same config."""
    fields: List[Dict[str, Any]] = [
        {"key": "name", "label": "Name", "type": "text",
         "placeholder": "Your full name", "required": True},
        {"key": "issue", "label": "Issue", "type": "textarea",
         "placeholder": "Describe the problem", "required": True},
        {"key": "priority", "label": "Priority", "type": "select",
         "placeholder": "", "required": False, "options": list(config.priorities)},
        {"key": "category", "label": "Category", "type": "select",
         "placeholder": "", "required": False, "options": list(config.categories)},
    ]
    for field in config.custom_fields:
        entry = field.model_dump(exclude={"options"})
        if field.type == "select":
            entry["options"] = list(field.options or ())
        fields.append(entry)
    return fields
