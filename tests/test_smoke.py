# tests/test_smoke.py

def test_imports():
    """
    A simple smoke test to ensure the public components of the
    package are importable.
    """
    try:
        from avocado_core import (
            AvocadoConfig,
            ContentLoader,
            FileLocator,
            JsonCodec,
            ResourceNotFoundError,
        )
    except ImportError as e:
        assert False, f"Failed to import core components: {e}"

    assert issubclass(ResourceNotFoundError, FileNotFoundError)


def test_version():
    import avocado_core

    assert avocado_core.__version__ == "0.1.0"
