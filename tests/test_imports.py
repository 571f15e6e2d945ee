"""Smoke tests: verify all ctrue_tools modules import successfully."""


def test_import_init():
    import ctrue_tools  # noqa: F401


def test_import_classifier():
    from ctrue_tools.trigger_classifier import CTrueAnalysis, classify_event  # noqa: F401


def test_import_estimate():
    import ctrue_tools.estimate_efficiency  # noqa: F401


def test_import_report():
    import ctrue_tools.trigger_classifier.report  # noqa: F401
