"""
Verify package imports work correctly.

These tests ensure the package is properly installed and modules
can be imported. Critical for catching setup.py/installation issues
in CI environments.
"""


def test_pdf_generator_package_structure():
    """Verify pdf_generator package is importable."""
    import importlib.util
    spec = importlib.util.find_spec('pdf_generator')
    assert spec is not None, "pdf_generator should be importable (package must be installed)"


def test_pdf_generator_app_can_be_imported():
    """Verify the FastAPI app can be imported."""
    from pdf_generator.app import app
    assert app is not None
    assert hasattr(app, 'routes')

    paths = {route.path for route in app.routes}
    assert "/health" in paths
    assert "/generate-pdf" in paths


def test_pipeline_and_browser_can_be_imported():
    """Verify core modules can be imported."""
    from pdf_generator.browser import BrowserController
    from pdf_generator.pipeline import ConversionPipeline
    assert callable(BrowserController)
    assert callable(ConversionPipeline)
