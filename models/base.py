from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Dict, Optional

class BaseGolfModel(BaseModel):
    """Shared configuration and methods."""
    model_config = ConfigDict(validate_assignment=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with a recomputed or corrected value. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe dict for the presentation layer."""
        return self.model_dump(mode="json")
