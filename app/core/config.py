# app/core/config.py
from __future__ import annotations
import base64
import binascii
import json
import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from app.exceptions.errors import ConfigurationError

load_dotenv(override=True)

class Settings:
    # ---- Entorno ----
    APP_ENV: str
    LOG_LEVEL: str

    # ---- API ----
    API_V1_STR: str

    # ---- GEE ----
    EARTHENGINE_PROJECT: Optional[str]
    GEE_PRIVATE_KEY: Optional[str]
    GEE_KEY_B64: Optional[str]
    S2_COLLECTION: str

    def __init__(self) -> None:
        # -------- Base de entorno --------
        self.APP_ENV = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "local")).lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # -------- API --------
        self.API_V1_STR = os.getenv("API_V1_STR", "/api/v1")

        # -------- GEE --------
        self.EARTHENGINE_PROJECT = os.getenv("EARTHENGINE_PROJECT")
        self.GEE_PRIVATE_KEY = os.getenv("GEE_PRIVATE_KEY")
        self.GEE_KEY_B64 = os.getenv("GEE_KEY_B64")
        self.S2_COLLECTION = os.getenv("S2_COLLECTION", "COPERNICUS/S2_SR_HARMONIZED")

    @property
    def has_gee_credentials(self) -> bool:
        return bool(self.GEE_PRIVATE_KEY or self.GEE_KEY_B64)

    def get_gee_credentials_info(self) -> Dict[str, Any]:
        """
        Devuelve la clave de la service account ya parseada:
        - JSON inline (GEE_PRIVATE_KEY)
        - JSON en base64 (GEE_KEY_B64)
        Cualquier otro caso es un error de configuración.
        """
        if self.GEE_PRIVATE_KEY:
            raw = self.GEE_PRIVATE_KEY
        elif self.GEE_KEY_B64:
            try:
                raw = base64.b64decode(self.GEE_KEY_B64).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError):
                raise ConfigurationError("Server config error: GEE_KEY_B64 is not valid base64.")
        else:
            raise ConfigurationError("Server config error: GEE_PRIVATE_KEY not set.")

        try:
            info = json.loads(raw)
        except json.JSONDecodeError:
            raise ConfigurationError("Server config error: GEE_PRIVATE_KEY is not valid JSON.")
        if not isinstance(info, dict):
            raise ConfigurationError("Server config error: GEE_PRIVATE_KEY must be a JSON object.")
        return info

    def get_gee_project(self, info: Dict[str, Any]) -> Optional[str]:
        return self.EARTHENGINE_PROJECT or info.get("project_id")

settings = Settings()

def get_settings() -> Settings:
    return settings
