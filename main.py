"""
Main Application Entry Point
This module serves as the main entry point for the dashboard backend.
It initializes all components and starts the Flask server.
"""

from flask import Flask
from config import Config
from aqi_service import AirQualityService
from api_routes import create_routes


def create_app(service=None):
    """
    Create and configure the Flask application.

    Args:
        service: AirQualityService to serve; built from the environment
            when omitted

    Returns:
        Flask: Configured Flask application
    """
    # Initialize Flask app
    app = Flask(__name__)

    # Initialize the pipelines
    if service is None:
        service = AirQualityService.from_config()

    # Create routes
    create_routes(app, service)

    return app


def main():
    """Main function to run the application."""
    app = create_app()

    # Run the Flask application
    app.run(
        debug=Config.DEBUG,
        host=Config.HOST,
        port=Config.PORT,
        threaded=Config.THREADED
    )


if __name__ == '__main__':
    main()
