"""Pre-flight validation for the Streamlit UI.

No ORM, no DB: uses the API client for backend checks.
"""
from typing import List


def validate_backend_connection(base_url: str | None = None) -> List[str]:
    """Validate that the FastAPI backend is reachable."""
    errors = []
    try:
        from churchdash.ui.api_client import ChurchDashClient
        client = ChurchDashClient(base_url) if base_url else ChurchDashClient()
        client.health()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
    return errors


def run_all_checks() -> List[str]:
    """Run all validation checks."""
    return validate_backend_connection()
