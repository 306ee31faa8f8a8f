# run.py
import os
import atexit

from ncportal import create_app
from ncportal.extensions import notification_gateway

# Configuration is chosen by FLASK_ENV (config.py loads .env)
app = create_app()

# Release the pooled vendor HTTP connections on shutdown
atexit.register(notification_gateway.close, app)

if __name__ == '__main__':
    # Flask's built-in server is for development only. Use Gunicorn in production.
    host = os.environ.get('FLASK_RUN_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_RUN_PORT', 5000))
    app.run(host=host, port=port)
