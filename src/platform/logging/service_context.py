"""
Service context for log lines.

Identifies which process wrote a record when several gate terminals or API
workers share one log collector.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'parking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    instance_id = os.getenv('INSTANCE_ID') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance_id}'
