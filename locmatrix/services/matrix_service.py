import logging
import time
from typing import Callable, Optional

from locmatrix.domain.app_config import AppConfig
from locmatrix.domain.filters import Filters
from locmatrix.domain.matrix import MatrixTableModel
from locmatrix.exceptions import CrawlFailedError, MalformedRecordError, RecordFetchError
from locmatrix.services.entity_tree import EntityTreeBuilder

logger = logging.getLogger(__name__)


class MatrixService:
    """Builds the localization matrix for one root entry.

    A fresh EntityTreeBuilder and a fresh analytics collector are created per
    call, so no cache or counters survive between two matrices.
    """

    def __init__(
        self,
        *,
        record_store,
        app_config: AppConfig,
        analytics_factory: Callable,
        request_delay: float = 0.0,
    ):
        self.record_store = record_store
        self.app_config = app_config
        self.analytics_factory = analytics_factory
        self.request_delay = request_delay

    def available_locales(self) -> list[str]:
        return self.record_store.list_locales()

    def build_matrix(
        self,
        entry_id: str,
        filters: Filters,
        user_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> MatrixTableModel:
        analytics = self.analytics_factory()
        analytics.log_filters(filters)
        if user_id:
            analytics.log_user(user_id)
        if content_type:
            analytics.log_content_type(content_type)

        started = time.monotonic()
        try:
            logger.debug("Loading data for the matrix of %s...", entry_id)
            builder = EntityTreeBuilder(
                filters.locales,
                self.record_store,
                analytics,
                excluded_content_types=self.app_config.excluded_content_types,
                default_locale=self.app_config.default_locale,
                request_delay=self.request_delay,
            )
            rows = builder.build_tree(entry_id)
            model = MatrixTableModel(filters.locales, rows)
            analytics.log_rows(model.row_count).log_loading_time((time.monotonic() - started) * 1000)
            logger.info("Built matrix for %s: %s rows, usage %s", entry_id, model.row_count, builder.usage)
            return model
        except (RecordFetchError, MalformedRecordError) as e:
            analytics.log_error(e)
            logger.error("Crawl failed for %s: %s", entry_id, e, exc_info=True)
            raise CrawlFailedError(entry_id, e) from e
        finally:
            try:
                analytics.send()
            except Exception as e:
                logger.warning("Failed to send analytics: %s", e)
