import json
import logging
import time
import traceback
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_obj = {
            'level': record.levelname,
            'time': self.formatTime(record, '%Y-%m-%d %H:%M:%S'),
        }
        if isinstance(record.msg, dict):
            log_obj.update(record.msg)
        else:
            log_obj['message'] = record.getMessage()
        return json.dumps(log_obj, ensure_ascii=False, default=str)


logger = logging.getLogger('auth_api.middleware')
logger.setLevel(logging.INFO)
logger.propagate = False
handler = logging.StreamHandler()
handler.setFormatter(JsonFormatter())
logger.addHandler(handler)


def _request_info(request: Request, start: float, end: float) -> dict:
    # id пользователя появляется только после проверки токена
    claims = getattr(request.state, 'claims', None) or {}

    user_ip = request.headers.get('X-Real-IP') or \
        request.headers.get('X-Forwarded-For', '').split(',')[0].strip() or \
        (request.client.host if request.client else '')

    return {
        'user_id': claims.get('sub', ''),
        'user_ip': user_ip,
        'request_method': request.method,
        'request_url': str(request.url),
        'request_path': request.url.path,
        'request_duration_ms': round((end - start) * 1000, 2),
    }


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()

        try:
            response = await call_next(request)
            end = time.perf_counter()
            await self.log(request, response, start, end)
            return response
        except Exception as e:
            end = time.perf_counter()
            await self.log_exception(request, e, start, end)
            raise

    @staticmethod
    async def log(request: Request, response: Response, start: float, end: float):
        log_data = {'http_code': response.status_code}
        log_data.update(_request_info(request, start, end))

        status_code = response.status_code
        if status_code >= 500:
            logger.error(msg=log_data)
        elif status_code >= 400:
            logger.warning(msg=log_data)
        else:
            logger.info(msg=log_data)

    @staticmethod
    async def log_exception(request: Request, exception: Exception, start: float, end: float):
        log_data = {'http_code': 500}
        log_data.update(_request_info(request, start, end))
        log_data.update({
            'exception': str(exception),
            'exception_type': type(exception).__name__,
            'traceback': traceback.format_exc(),
        })
        logger.error(msg=log_data)
