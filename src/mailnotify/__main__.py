"""``python -m mailnotify``: run the mailer CLI against the real SMTP transport.

Equivalent to the ``mailnotify`` console script; the exit code is the
``ExitCode`` of the command (69 on SMTP failure, 78 on missing settings).
"""

from __future__ import annotations

from .adapters.cli.main import main
from .composition import build_production

if __name__ == "__main__":
    raise SystemExit(main(services_factory=build_production))
