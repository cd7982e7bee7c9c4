"""Export the service's environment variables as JSON.

Writes one entry per settings class with the environment variable name,
type, default, whether it is required and its description. The output
backs the configuration reference in docs/.
"""

import json
import sys
from pathlib import Path
from typing import Any, Type

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    DatabaseSettings,
    Settings,
    TenancySettings,
    TenantDirectorySettings,
)


def _display_default(default: Any, is_required: bool) -> Any:
    """Render a field default for the reference; secrets are masked."""
    if isinstance(default, SecretStr):
        return None if is_required else "********"
    if is_required or default is None:
        return None
    if isinstance(default, (list, dict, bool, int, float)):
        return default
    return str(default)


def get_model_metadata(settings_class: Type[BaseSettings]) -> dict[str, Any]:
    prefix = settings_class.model_config.get("env_prefix", "")
    properties = []

    for name, field in settings_class.model_fields.items():
        type_name = getattr(field.annotation, "__name__", str(field.annotation))

        if field.default_factory is not None:
            default = field.default_factory()
        else:
            default = field.default

        # Secrets defaulting to an empty value must be set explicitly
        is_required = default is PydanticUndefined or (
            isinstance(default, SecretStr) and default.get_secret_value() == ""
        )

        properties.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": "Secret" if "Secret" in type_name else type_name,
                "default": _display_default(default, is_required),
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": settings_class.__doc__ or "",
        "properties": properties,
    }


def export_settings(output_path: Path | None = None) -> Path:
    classes = [
        Settings,
        DatabaseSettings,
        TenantDirectorySettings,
        TenancySettings,
    ]

    data = {cls.__name__: get_model_metadata(cls) for cls in classes}

    output_path = output_path or root_path / "docs" / "env-vars.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Exported settings to {output_path}")
    return output_path


if __name__ == "__main__":
    export_settings()
