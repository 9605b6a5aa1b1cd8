"""E2E test fixtures: real hub, isolated environment."""

import os
import subprocess
import sys

import pytest

E2E_REPO = os.environ.get("HF_METADATA_E2E_REPO", "openai-community/gpt2")


def pytest_collection_modifyitems(config, items):
    if os.environ.get("HF_METADATA_E2E"):
        return
    skip = pytest.mark.skip(reason="set HF_METADATA_E2E=1 to run tests against the real hub")
    for item in items:
        if "e2e" in item.nodeid.split("/"):
            item.add_marker(skip)


def _run_cli(*args, env=None, timeout=120):
    """Run the hf-metadata CLI and return CompletedProcess."""
    cmd = [sys.executable, "-m", "hf_metadata_fetcher.cli", *args]
    return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, env=env)


@pytest.fixture
def e2e_repo():
    return E2E_REPO


@pytest.fixture
def anonymous_env(tmp_path):
    """Environment without any token source (NOT the real ~/.cache/huggingface)."""
    env = {k: v for k, v in os.environ.items() if not k.startswith(("HF_", "HUGGING_FACE"))}
    env["HOME"] = str(tmp_path)
    return env


@pytest.fixture
def run_cli():
    return _run_cli
