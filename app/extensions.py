from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from redis import Redis
from redis.exceptions import RedisError
from rq import Queue
from flask import current_app

# kwargs understood by Queue.enqueue but not by the job function itself
RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url:
            # no Redis configured (tests, local dev): jobs run inline
            self.redis = None
            self.queue = None
            return
        self.redis = Redis.from_url(url)
        self.queue = Queue("default", connection=self.redis)

    def _run_sync(self, func, *args, **kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        return func(*args, **safe_kwargs)

    def enqueue(self, func, *args, **kwargs):
        # Prefer enqueueing to RQ, but run the job synchronously if Redis
        # is not configured or not reachable.
        if not self.queue:
            return self._run_sync(func, *args, **kwargs)

        try:
            return self.queue.enqueue(func, *args, **kwargs)
        except RedisError:
            current_app.logger.exception('RQ enqueue failed, falling back to sync execution')
            return self._run_sync(func, *args, **kwargs)


db = SQLAlchemy()
login_manager = LoginManager()
rq = RQWrapper()
