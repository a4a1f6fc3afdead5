"""
Shared fixtures: a scripted process runner and a resolver that finds nothing.
"""
import pytest

from core import config
from core.manager import ToolboxManager
from core.models import CommandResult
from core.resolver import ToolResolver


class FakeRunner:
    """
    Stands in for ProcessRunner. Each run() pops the next scripted response;
    a response may be a CommandResult or a callable(path, args) -> CommandResult.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.spawned = []

    def run(self, path, args):
        self.calls.append((path, list(args)))
        if not self.responses:
            return CommandResult.success("")
        response = self.responses.pop(0)
        if callable(response):
            return response(path, args)
        return response

    def spawn(self, path, args):
        self.spawned.append((path, list(args)))
        return CommandResult.success()


@pytest.fixture(autouse=True)
def isolated_analytics(tmp_path, monkeypatch):
    """Keep analytics out of the real home directory."""
    analytics_dir = tmp_path / "analytics"
    monkeypatch.setattr(config, "ANALYTICS_DIR", analytics_dir)
    monkeypatch.setattr(config, "ANALYTICS_FILE", analytics_dir / "analytics.jsonl")
    return analytics_dir


@pytest.fixture
def resolver(tmp_path):
    return ToolResolver(str(tmp_path / "app"), is_windows=False, exists=lambda p: False)


@pytest.fixture
def make_manager(resolver):
    def _make(*responses):
        runner = FakeRunner(responses)
        return ToolboxManager(resolver=resolver, runner=runner), runner
    return _make
