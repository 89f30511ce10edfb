"""Operation-scoped logging with a correlation key."""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from guru.domain.prognosis.errors import GuruError


class OperationLogger(logging.LoggerAdapter):
    """Prefixes every message with the operation id and learner id."""

    def process(self, msg, kwargs):
        extra = dict(self.extra or {})
        kwargs["extra"] = {**extra, **kwargs.get("extra", {})}
        prefix = (
            f"[{extra.get('operation')}:{extra.get('operation_id')} "
            f"learner={extra.get('learner_id')}]"
        )
        return f"{prefix} {msg}", kwargs


@contextmanager
def operation(logger: logging.Logger, name: str, learner_id: str) -> Iterator[OperationLogger]:
    """
    Log start, end and failure of one facade operation.

    Client errors (GuruError) are logged as warnings, anything else with a traceback.
    The exception is always re-raised.
    """
    log = OperationLogger(
        logger,
        {"operation": name, "operation_id": uuid.uuid4().hex[:8], "learner_id": learner_id},
    )
    log.info("started")
    try:
        yield log
    except GuruError as e:
        log.warning(f"rejected: {e}")
        raise
    except Exception as e:
        log.error(f"failed: {e}", exc_info=True)
        raise
    log.info("finished")
