"""CORS middleware configuration"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from legal_navigator.config import Settings


def setup_cors(app: FastAPI, settings: Settings):
    """
    Configure CORS for the chat client

    The PDF download needs Content-Disposition exposed so browsers can read
    the attachment filename.

    Args:
        app: FastAPI application instance
        settings: Application settings (cors_origins)
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition"],
    )
