"""
Startup script for the SocialX gateway.

Loads settings, configures logging, reports where /api traffic will be
forwarded and serves ``main:app`` with uvicorn.
"""

import sys
import time
from pathlib import Path
from typing import List, Optional

# Add current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from config import Settings, get_settings
from logging_config import setup_logging, get_logger


class ApplicationStartup:
    """Handles configuration checks before the server starts"""

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.logger = None
        self.startup_time = time.time()

    def configuration_warnings(self) -> List[str]:
        """Settings that work but are probably wrong for the environment"""
        warnings = []
        if self.settings.is_production:
            if self.settings.debug:
                warnings.append("Debug mode is enabled in production")
            if "localhost" in self.settings.api_url or "127.0.0.1" in self.settings.api_url:
                warnings.append(
                    f"API proxy forwards to {self.settings.api_url} in production - "
                    "set NEXT_PUBLIC_API_URL"
                )
            if "*" in self.settings.cors_origins and self.settings.cors_allow_credentials:
                warnings.append("Wildcard CORS origin combined with credentials")
        return warnings

    def validate_environment(self) -> None:
        """Set up logging and report the effective configuration"""
        self.settings = get_settings()

        setup_logging(self.settings)
        self.logger = get_logger(__name__)

        self.logger.info(
            f"{self.settings.app_name} gateway {self.settings.app_version} "
            f"({self.settings.environment.value})"
        )
        self.logger.info(
            f"API proxy: {self.settings.api_proxy_source} -> "
            f"{self.settings.proxy_destination} "
            f"(timeout {self.settings.proxy_timeout}s, "
            f"max {self.settings.proxy_max_connections} connections)"
        )
        self.logger.info(f"CORS origins: {', '.join(self.settings.cors_origins)}")

        for warning in self.configuration_warnings():
            self.logger.warning(warning)

    def startup(self) -> None:
        self.validate_environment()
        self.logger.info(
            f"Startup checks completed in {time.time() - self.startup_time:.2f}s - "
            f"serving on {self.settings.host}:{self.settings.port}"
        )


def main():
    """Main startup function"""
    startup_manager = ApplicationStartup()

    startup_manager.startup()

    import uvicorn

    settings = startup_manager.settings
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_level=settings.log_level.value.lower(),
        use_colors=not settings.is_production,
        server_header=False,
    )
    startup_manager.logger.info("Gateway stopped")


if __name__ == "__main__":
    main()
