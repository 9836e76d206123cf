"""Console script entry point with production wiring.

Lives outside ``adapters`` so wiring the composition root into the CLI
does not cross layer boundaries.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the ``prefreport`` console script with production services."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
