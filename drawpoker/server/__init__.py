"""
DrawPoker Server - FastAPI HTTP Layer
"""

from drawpoker.server.app import create_app

__all__ = ["create_app"]
