"""Top-level package for Number Cruncher.

Provides subpackages:
- number_cruncher.core – digit and rule data models, settings schema
- number_cruncher.puzzle – generation, rule library, selection and the session
- number_cruncher.utils – logging helpers for a host that shows the puzzle log
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
    except ImportError:
        return "0.0.0"
    try:
        return pkg_version("number_cruncher")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
