from logging import getLogger

from prometheus_client import Counter, Summary, start_http_server

LOG = getLogger(__name__)

QUERY_OK = Counter('num_successful_queries', 'Number of queries which executed successfully')
BAD_REQUEST = Counter('num_bad_requests', 'Number of received invalid queries')
SERVER_ERROR = Counter('num_server_errors', 'Number of queries which resulted in server error')
EXEC_TIME = Summary('query_exec_time_ms', 'Time spent processing query')


def start_metrics_server(port: int) -> None:
    start_http_server(port)
    LOG.info(f'serving metrics on port {port}')
