from fastapi import Request

from app.config.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings con los que se construyó la aplicación"""
    return request.app.state.settings
