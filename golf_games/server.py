import logging
import os

import uvicorn

from golf_games.settings import Settings, load_settings

logger = logging.getLogger(__name__)
APP_MODULE = "golf_games.main:app"


def tls_options(settings: Settings) -> dict[str, str]:
    """uvicorn TLS keyword arguments, empty unless both cert and key are set."""
    if not (settings.ssl_cert_file or settings.ssl_key_file):
        return {}
    if not (settings.ssl_cert_file and settings.ssl_key_file):
        logger.warning("SSL_CERT_FILE and SSL_KEY_FILE must both be set, serving plain HTTP.")
        return {}
    options = {"ssl_certfile": settings.ssl_cert_file, "ssl_keyfile": settings.ssl_key_file}
    if settings.ssl_ca_file:
        options["ssl_ca_certs"] = settings.ssl_ca_file
    return options


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    options = tls_options(settings)
    scheme = "https" if options else "http"
    logger.info("Serving scoring API at %s://%s:%s", scheme, settings.host, settings.port)
    uvicorn.run(
        APP_MODULE,
        host=settings.host,
        port=settings.port,
        log_level=os.getenv("UVICORN_LOG_LEVEL", settings.log_level.lower()),
        **options,
    )


if __name__ == "__main__":
    main()
