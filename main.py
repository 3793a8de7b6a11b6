"""Point d'entrée de l'application de démonstration."""

from __future__ import annotations

import logging

from logindemo.config import load_config
from logindemo.services import SimulatedAuthenticator
from logindemo.state import AppState
from logindemo.ui.app import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    config = load_config()
    logging.basicConfig(
        level=config.log_level_number,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    authenticator = SimulatedAuthenticator.from_config(config)
    state = AppState()
    app = MainWindow(authenticator=authenticator, config=config, state=state)

    logger.info("Starting login demo")
    try:
        app.run()
    finally:
        logger.info("Login demo stopped")


if __name__ == "__main__":
    main()
