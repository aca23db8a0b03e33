import logging
from contextvars import ContextVar
from .config import settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")

def setup_logging():
    level = logging.DEBUG if settings.ENV == "local" else logging.INFO

    # attach request_id to every log record
    old_factory = logging.getLogRecordFactory()
    if not getattr(old_factory, "_with_request_id", False):
        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.request_id = request_id_ctx.get()
            return record
        record_factory._with_request_id = True
        logging.setLogRecordFactory(record_factory)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
    )
