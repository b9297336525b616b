import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from locmatrix.exceptions import CrawlFailedError, InvalidFilterError, RecordFetchError
from locmatrix.services.app_config_parser import split_comma_separated
from locmatrix.services.locale_selection import ALL_MODE, LocaleSelection, sort_locales
from locmatrix.services.matrix_service import MatrixService

logger = logging.getLogger(__name__)


def create_matrix_router(matrix_service: MatrixService, locale_selection: LocaleSelection):
    router = APIRouter(prefix="/matrix", tags=["Matrix"])
    app_config = locale_selection.app_config

    def _available_locales() -> list[str]:
        try:
            return matrix_service.available_locales()
        except RecordFetchError as e:
            logger.error("Could not list locales: %s", e)
            raise HTTPException(status_code=502, detail="could not load locales")

    @router.get("/locales")
    def list_locales():
        available = _available_locales()
        return {
            "locales": sort_locales(available, app_config.locales_order),
            "default_locale": app_config.default_locale,
            "default_selection": locale_selection.default_locales(),
            "all_option": app_config.locales_all_option,
            "clear_all": app_config.locales_clear_all,
            "modes": [{"id": m.id, "name": m.name, "locales": m.locales} for m in app_config.locales_modes],
            "filters": {
                "hide_localized": app_config.hide_fully_localized,
                "hide_fully_non_localized": app_config.hide_fully_non_localized,
            },
        }

    @router.get("/{entry_id}")
    def get_matrix(
        entry_id: str,
        locales: Optional[str] = None,
        mode: Optional[str] = None,
        hide_localized: bool = False,
        hide_fully_non_localized: bool = False,
        user_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ):
        requested = split_comma_separated(locales, "locales") if locales else None
        # only explicit locales and the "all" mode need the environment's locale list
        available = _available_locales() if (requested or mode == ALL_MODE) else []
        try:
            filters = locale_selection.resolve(
                available,
                locales=requested,
                mode=mode,
                hide_localized=hide_localized,
                hide_fully_non_localized=hide_fully_non_localized,
            )
        except InvalidFilterError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            model = matrix_service.build_matrix(entry_id, filters, user_id=user_id, content_type=content_type)
        except CrawlFailedError:
            # details are logged by the service; keep them out of the response
            raise HTTPException(status_code=502, detail="crawl failed")

        body = model.to_dict(filters)
        body["filters"] = {
            "hide_localized": filters.hide_localized,
            "hide_fully_non_localized": filters.hide_fully_non_localized,
        }
        return body

    return router
