import asyncio
import logging
import time
from dataclasses import asdict
from typing import Any, Callable

import falcon
import falcon.asgi as fa
import marshmallow as mm

from logquery.errors import InvalidParam
from logquery.log.mapper import map_log_list_item, map_log
from logquery.log.request import parse_get_logs_request, parse_list_logs_request
from logquery.log.schema import GetLogsSchema, MAX_ITEMS
from logquery.log.service import LogService
from logquery.metrics import QUERY_OK, BAD_REQUEST, SERVER_ERROR, EXEC_TIME


LOG = logging.getLogger(__name__)


def _parse(parser: Callable[[], dict], req: fa.Request) -> dict:
    try:
        return parser()
    except InvalidParam as e:
        BAD_REQUEST.inc()
        LOG.warning(f'invalid request: {e}', extra={'query_string': req.query_string})
        raise falcon.HTTPBadRequest(description=str(e))
    except mm.ValidationError as e:
        BAD_REQUEST.inc()
        LOG.warning(f'invalid request: {e}', extra={'query_string': req.query_string})
        raise falcon.HTTPBadRequest(description=str(e.normalized_messages()))


async def _execute(fn: Callable[..., Any], **kwargs) -> Any:
    start_time = time.time()
    try:
        result = await asyncio.to_thread(fn, **kwargs)
    except Exception as e:
        SERVER_ERROR.inc()
        LOG.exception('failed to execute query')
        raise falcon.HTTPInternalServerError(description=str(e))
    QUERY_OK.inc()
    EXEC_TIME.observe((time.time() - start_time) * 1000)
    return result


class GetLogsResource:
    def __init__(self, service: LogService, max_items: int = MAX_ITEMS):
        self._service = service
        self._schema = GetLogsSchema(max_items=max_items)

    async def on_get(self, req: fa.Request, res: fa.Response):
        args = _parse(lambda: parse_get_logs_request(req.params, self._schema), req)
        logs = await _execute(self._service.find_many, **args)
        result = [map_log_list_item(log) for log in logs]
        res.media = {
            'status': '1' if result else '0',
            'message': 'OK' if result else 'No record found',
            'result': result
        }


class ListLogsResource:
    def __init__(self, service: LogService):
        self._service = service

    async def on_get(self, req: fa.Request, res: fa.Response):
        args = _parse(lambda: parse_list_logs_request(req.params), req)
        pagination = await _execute(self._service.find_all, route=req.path, **args)
        res.media = {
            'items': [map_log(log) for log in pagination.items],
            'meta': asdict(pagination.meta),
            'links': pagination.links
        }


def create_app(service: LogService, max_items: int = MAX_ITEMS) -> fa.App:
    app = fa.App()
    app.add_route('/api/logs', ListLogsResource(service))
    app.add_route('/api/logs/getLogs', GetLogsResource(service, max_items))
    return app
