"""Dependency injection container for the application."""
import os

from dependency_injector import containers, providers
import requests

from locmatrix import config as env
from locmatrix.services.analytics import make_analytics
from locmatrix.services.app_config_parser import AppConfigParser, load_app_config
from locmatrix.services.config_file_store import ConfigFileStore
from locmatrix.services.http_service import HttpService
from locmatrix.services.locale_selection import LocaleSelection
from locmatrix.services.matrix_service import MatrixService
from locmatrix.services.record_store import ContentManagementClient


# Environment variables used by the container (read via `locmatrix.config` helpers).
#
# CONTENTFUL_CMA_URL (str, default: "https://api.contentful.com")
#   Base URL of the Content Management API.
#
# CONTENTFUL_CMA_TOKEN (str | optional)
#   Personal access token sent as a Bearer token with every record store request.
#
# CONTENTFUL_SPACE_ID (str | required to crawl)
#   Space holding the entries, assets and content types.
#
# CONTENTFUL_ENVIRONMENT (str, default: "master")
#   Environment inside the space.
#
# USER_AGENT (str, default: "LocMatrix/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for record store and analytics requests.
#
# LOCMATRIX_REQUEST_DELAY (float seconds, default: 0.0)
#   Pause after every real record store fetch, to stay under API rate limits.
#
# LOCMATRIX_CONFIG_PATH (str, default: "configs/matrix.yml")
#   App parameters file (default locale, locale modes, excluded content types...).
ENV = {
    "CONTENTFUL_CMA_URL": env.cma_base_url(),
    "CONTENTFUL_CMA_TOKEN": env.get_optional_str_env("CONTENTFUL_CMA_TOKEN"),
    "CONTENTFUL_SPACE_ID": env.get_optional_str_env("CONTENTFUL_SPACE_ID"),
    "CONTENTFUL_ENVIRONMENT": env.get_str_env("CONTENTFUL_ENVIRONMENT", "master"),
    "USER_AGENT": env.get_str_env("USER_AGENT", "LocMatrix/0.1"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "LOCMATRIX_REQUEST_DELAY": env.get_float_env("LOCMATRIX_REQUEST_DELAY", 0.0),
    "LOCMATRIX_CONFIG_PATH": env.app_config_path(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the LocMatrix application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
        auth_token=config.CONTENTFUL_CMA_TOKEN,
    )

    record_store = providers.Singleton(
        ContentManagementClient,
        http_service=http_service,
        base_url=config.CONTENTFUL_CMA_URL.as_(str),
        space_id=config.CONTENTFUL_SPACE_ID,
        environment_id=config.CONTENTFUL_ENVIRONMENT.as_(str),
    )

    config_file_store = providers.Singleton(
        ConfigFileStore,
        configs_dir=providers.Callable(os.getcwd),
    )

    app_config_parser = providers.Singleton(
        AppConfigParser
    )

    app_config = providers.Singleton(
        load_app_config,
        file_store=config_file_store,
        parser=app_config_parser,
        config_path=config.LOCMATRIX_CONFIG_PATH.as_(str),
    )

    # A fresh collector per matrix build
    analytics = providers.Factory(
        make_analytics,
        host=app_config.provided.analytics_host,
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    locale_selection = providers.Singleton(
        LocaleSelection,
        app_config=app_config,
    )

    matrix_service = providers.Singleton(
        MatrixService,
        record_store=record_store,
        app_config=app_config,
        analytics_factory=analytics.provider,
        request_delay=config.LOCMATRIX_REQUEST_DELAY.as_(float),
    )
