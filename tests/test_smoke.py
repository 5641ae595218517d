"""
Smoke test - verifies test infrastructure is working.
Run: pytest tests/test_smoke.py -v
"""


def test_import_package():
    """Verify crowdguard package can be imported."""
    from crowdguard.core.config import get_settings
    from crowdguard.processing.scenarios import scenario_registry

    settings = get_settings()
    assert settings is not None
    assert hasattr(settings, "overcrowding_limit")
    assert set(scenario_registry) >= {
        "fall_detection", "altercation", "crowd_rush", "animal_presence", "overcrowding"
    }


def test_pytest_runs():
    """Basic sanity check that pytest executes tests."""
    assert True
