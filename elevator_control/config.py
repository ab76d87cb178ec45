"""
Configuration management with environment variables.
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration."""

    def __init__(self):
        self.num_floors = int(os.getenv("NUM_FLOORS", 10))
        self.num_cars = int(os.getenv("NUM_CARS", 2))
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", 5000))
        self.demo_ticks = int(os.getenv("DEMO_TICKS", 15))
