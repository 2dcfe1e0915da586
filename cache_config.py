from flask_caching import Cache

import config

# Shared here so pages can memoize without importing app.py.
# app.py binds it with cache.init_app(server).
# The dataset is read-only after load, so entries only expire with the process.
cache = Cache(config={
    'CACHE_TYPE': 'FileSystemCache',
    'CACHE_DIR': config.CACHE_DIR,
    'CACHE_DEFAULT_TIMEOUT': 0,
    'CACHE_THRESHOLD': 8
})
