"""
Summary: Validate Summary/Why header docstring schema for selected modules.
Why: Prevent regression to inconsistent header formats across touched files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

HEADER_MARK: str = '"""'
SUMMARY_PREFIX: str = "Summary: "
WHY_PREFIX: str = "Why: "
HEADER_LENGTH: int = 4

REPO_ROOT: Path = Path(__file__).resolve().parents[1]

TARGET_MODULES: tuple[Path, ...] = (
    Path("src/msupack/features/apply/usecases/apply_engine.py"),
    Path("src/msupack/features/apply/usecases/cancellation.py"),
    Path("src/msupack/features/apply/usecases/negotiation.py"),
    Path("src/msupack/features/apply/usecases/planning.py"),
    Path("src/msupack/features/apply/usecases/ports.py"),
    Path("src/msupack/features/library/usecases/pcm_cache.py"),
    Path("src/msupack/features/library/usecases/scan.py"),
    Path("tests/features/apply/test_planning.py"),
    Path("tests/features/apply/test_negotiation.py"),
)


@pytest.mark.parametrize("module_path", TARGET_MODULES, ids=lambda path: str(path))
def test_module_headers_follow_summary_why_schema(module_path: Path) -> None:
    """Ensure module header docstring uses Summary and Why lines."""

    lines = (REPO_ROOT / module_path).read_text(encoding="utf-8").splitlines()
    start = next((index for index, line in enumerate(lines) if line.strip()), None)
    assert start is not None, f"{module_path} must not be empty"
    assert len(lines) >= start + HEADER_LENGTH, (
        f"{module_path} must provide at least {HEADER_LENGTH} header lines"
    )

    opening, summary, why, closing = lines[start : start + HEADER_LENGTH]
    assert opening.strip() == HEADER_MARK, f"{module_path} must start with header docstring"
    assert closing.strip() == HEADER_MARK, f"{module_path} header must close with triple quotes"

    assert summary.startswith(SUMMARY_PREFIX), (
        f"{module_path} summary line must begin with '{SUMMARY_PREFIX}'"
    )
    assert why.startswith(WHY_PREFIX), f"{module_path} why line must begin with '{WHY_PREFIX}'"
    assert summary.removeprefix(SUMMARY_PREFIX).strip(), f"{module_path} summary text cannot be empty"
    assert why.removeprefix(WHY_PREFIX).strip(), f"{module_path} why text cannot be empty"
