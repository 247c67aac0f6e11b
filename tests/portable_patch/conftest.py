"""Shared fixtures for portable patcher tests."""

import io
from pathlib import Path

import pytest

from portable_patch.portable_patch_session import PatchSession


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def original_main_js() -> bytes:
    """The unpatched main.js fixture, as raw bytes."""
    return (FIXTURES_DIR / "main.js").read_bytes()


@pytest.fixture
def app_root(tmp_path, original_main_js) -> Path:
    """An application root with resources/app/main.js in place."""
    app_dir = tmp_path / "resources" / "app"
    app_dir.mkdir(parents=True)
    (app_dir / "main.js").write_bytes(original_main_js)
    return tmp_path


@pytest.fixture
def main_js(app_root) -> Path:
    """Path to the target file inside app_root."""
    return app_root / "resources" / "app" / "main.js"


@pytest.fixture
def make_session():
    """Factory for sessions that read canned answers and capture output."""
    def _create_session(answers: str = '') -> PatchSession:
        return PatchSession(
            input_stream=io.StringIO(answers),
            output_stream=io.StringIO(),
            use_color=False
        )
    return _create_session


def session_output(session: PatchSession) -> str:
    """Everything a test session has written so far."""
    return session._output.getvalue()  # pylint: disable=protected-access


@pytest.fixture
def output_of():
    """Provide the session_output helper to tests."""
    return session_output
