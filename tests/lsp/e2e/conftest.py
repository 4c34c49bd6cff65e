"""Fixtures spawning linehint over stdio."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import AsyncGenerator

import pytest

from tests.lsp.e2e.lsp_client import LinehintClient


@pytest.fixture
async def linehint_client() -> AsyncGenerator[LinehintClient, None]:
    """Client connected to a freshly started server process."""
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "tests.lsp.e2e.server_entry",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
    )
    try:
        yield LinehintClient(process)
    finally:
        if process.returncode is None:
            process.kill()
            await process.wait()
