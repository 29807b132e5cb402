"""Local PlantUML engine — runs plantuml.jar in a subprocess."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from remder.errors.exceptions import EngineError
from remder.utils.image import describe_image

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 20.0


def resolve_jar_path(configured: str | Path | None = None) -> Path | None:
    """Locate plantuml.jar from config, then the current directory."""
    candidates: list[Path] = []
    if configured:
        candidates.append(Path(configured).expanduser())
    candidates.append(Path.cwd() / "plantuml.jar")

    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()
    return None


def extract_error_details(stderr_text: str) -> str:
    """Parse PlantUML stderr into a readable message."""
    raw = (stderr_text or "").replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.strip() for line in raw.split("\n") if line.strip()]
    if not lines:
        return "unknown error"

    # PlantUML reports syntax errors as: ERROR / <line> / <message>
    if len(lines) >= 3 and lines[0].upper() == "ERROR" and lines[1].isdigit():
        return f"line {lines[1]}: {lines[2]}"

    return "\n".join(lines[:8])


class PlantUmlJarEngine:
    """Renders PNG diagrams with a local ``plantuml.jar``."""

    def __init__(
        self,
        jar_path: str | Path,
        java: str = "java",
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._jar_path = Path(jar_path)
        self._java = java
        self._timeout = timeout

    @property
    def jar_path(self) -> Path:
        return self._jar_path

    def setup_issue(self) -> str | None:
        """Return why this engine can't run, or None if it looks usable."""
        if not self._jar_path.is_file():
            return f"plantuml.jar not found at {self._jar_path}"
        if shutil.which(self._java) is None:
            return f"Java runtime '{self._java}' not found in PATH"
        return None

    def command(self) -> list[str]:
        return [
            self._java,
            "-Djava.awt.headless=true",
            "-jar",
            str(self._jar_path),
            "-pipe",
            "-tpng",
            "-charset",
            "UTF-8",
        ]

    def generate(self, source: str) -> tuple[bytes, str]:
        try:
            result = subprocess.run(
                self.command(),
                input=source.encode("utf-8"),
                capture_output=True,
                check=False,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise EngineError("Local PlantUML render timed out", original=e) from e
        except OSError as e:
            raise EngineError(f"Local PlantUML render failed: {e}", original=e) from e

        if result.returncode != 0:
            details = extract_error_details(result.stderr.decode("utf-8", errors="replace"))
            raise EngineError(f"Local PlantUML render failed: {details}")

        image = result.stdout
        if not image:
            raise EngineError("Local PlantUML did not return PNG output")

        try:
            description = describe_image(image)
        except ValueError as e:
            raise EngineError(f"Local PlantUML returned invalid PNG: {e}", original=e) from e
        return image, description
