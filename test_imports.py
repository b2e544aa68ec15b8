"""
Test that the packages and application modules import correctly
"""


def test_third_party_imports():
    import fastapi
    import uvicorn
    import pydantic
    import pydantic_settings
    import httpx

    assert pydantic.VERSION.startswith("2")


def test_app_imports():
    from acm_calculator.config import settings
    from acm_calculator.models import AcmSnapshot, EligibilityResult, TrainingEventInput
    from acm_calculator.services import eligibility_service, snapshot_service, document_service
    from acm_calculator.routes import acm_router, eligibility_router

    assert settings.app_name
    assert eligibility_router.prefix == "/eligibility"
    assert acm_router.prefix == "/acm"


def test_openapi_schema():
    from acm_calculator.main import app

    schema = app.openapi()
    assert "/eligibility/calculate" in schema["paths"]
    assert "/acm/matrix" in schema["paths"]
