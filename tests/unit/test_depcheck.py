from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_framework_import_in_domain(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)
    violating_file = domain_dir / "model.py"
    violating_file.write_text("import sqlalchemy\n", encoding="utf-8")

    result = _run("--layer", "domain", str(domain_dir))

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "sqlalchemy" in combined_output
    assert str(violating_file) in combined_output


def test_depcheck_fails_on_infrastructure_import_in_application(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True, exist_ok=True)
    (application_dir / "service.py").write_text(
        "from eatin.infrastructure.db.session import get_engine\n",
        encoding="utf-8",
    )

    result = _run("--layer", "application", str(application_dir))

    assert result.returncode != 0
    assert "eatin.infrastructure.db.session" in result.stdout


def test_depcheck_allows_pydantic_in_application(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True, exist_ok=True)
    (application_dir / "dto.py").write_text("from pydantic import BaseModel\n", encoding="utf-8")

    result = _run("--layer", "application", str(application_dir))

    assert result.returncode == 0


def test_depcheck_passes_on_project_sources() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout


def test_depcheck_allows_tracing_api_but_not_sdk_in_application(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True, exist_ok=True)
    (application_dir / "service.py").write_text(
        "from opentelemetry import trace\nfrom opentelemetry.sdk.trace import TracerProvider\n",
        encoding="utf-8",
    )

    result = _run("--layer", "application", str(application_dir))

    assert result.returncode != 0
    assert "opentelemetry.sdk.trace" in result.stdout
    assert "-> opentelemetry\n" not in result.stdout
