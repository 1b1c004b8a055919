# SPDX-License-Identifier: MIT
"""Pytest environment setup.

* Ensure the repository root is importable so tests resolve the in-tree
  ``priceeval`` package without installing it.
* Pin BLAS thread pools to a single worker so floating point results are
  reproducible across machines.
* Keep log records from leaking between tests through ``propagate`` flags or
  handlers installed by :func:`priceeval.utils.logging.configure_logging`.
"""

from __future__ import annotations

import logging
import os
import pathlib
import sys
from typing import Iterator

import pytest

from tests.tolerances import THREAD_BOUND_ENV_VARS

for _env_key, _env_value in THREAD_BOUND_ENV_VARS.items():
    os.environ.setdefault(_env_key, _env_value)

ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    # pytest's own capture handlers subclass StreamHandler and manage themselves
    for handler in list(root.handlers):
        if handler not in handlers and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _isolate_priceeval_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("PRICEEVAL_"):
            monkeypatch.delenv(key, raising=False)
