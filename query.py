import json
import sys

from logquery.log.mapper import map_log_list_item
from logquery.log.request import parse_get_logs_request
from logquery.log.service import LogService
from logquery.store import connect


def main():
    db = sys.argv[1]
    request_file = sys.argv[2]

    with open(request_file) as f:
        params = json.load(f)

    args = parse_get_logs_request(params)
    logs = LogService(connect(db)).find_many(**args)

    json.dump([map_log_list_item(log) for log in logs], sys.stdout, indent=2)


if __name__ == '__main__':
    main()
