#!/usr/bin/env python3
"""
Main entry point for the elevator control API.
"""
import logging
from elevator_control import create_app
from elevator_control.config import Config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

if __name__ == "__main__":
    config = Config()
    app = create_app(config)
    app.run(host=config.host, port=config.port)
