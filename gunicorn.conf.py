import os

# Bind to 0.0.0.0 on the port given by PORT (default 10000)
bind = f"0.0.0.0:{os.environ.get('PORT','10000')}"

wsgi_app = "coursefiles:create_app()"

# Long downloads occupy a thread each; keep a few per worker so they don't block sign-ins
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "120"))
