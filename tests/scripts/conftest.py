"""Script-specific test fixtures."""

import importlib.util
import sys
from pathlib import Path

import pytest

# Ensure scripts can import from src
SCRIPTS_DIR = Path(__file__).parent.parent.parent / "scripts"
SRC_DIR = Path(__file__).parent.parent.parent / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

# Track dynamically loaded script modules for cleanup
_loaded_script_modules: set[str] = set()


def load_script_module(script_name: str):
    """Load a script as a module and track it for cleanup.

    Args:
        script_name: Name of script file (e.g., "render_stats.py")

    Returns:
        Loaded module object
    """
    script_path = SCRIPTS_DIR / script_name
    module_name = script_name.replace(".py", "")

    spec = importlib.util.spec_from_file_location(module_name, script_path)
    assert spec is not None, f"Could not load spec for {script_path}"
    assert spec.loader is not None, f"No loader for {script_path}"

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    _loaded_script_modules.add(module_name)

    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def cleanup_script_modules():
    """Remove dynamically loaded script modules after each test."""
    _loaded_script_modules.clear()

    yield

    for module_name in _loaded_script_modules:
        if module_name in sys.modules:
            del sys.modules[module_name]
    _loaded_script_modules.clear()


@pytest.fixture
def scripts_dir():
    """Path to the scripts directory."""
    return SCRIPTS_DIR


@pytest.fixture
def render_stats():
    """The render_stats script loaded as a module."""
    return load_script_module("render_stats.py")
