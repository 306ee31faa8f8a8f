# wsgi.py
import atexit

from ncportal import create_app
from ncportal.extensions import notification_gateway

# Entry point for WSGI servers, e.g. gunicorn --bind 0.0.0.0:5000 wsgi:application
application = create_app()

atexit.register(notification_gateway.close, application)

if __name__ == "__main__":
    print("WSGI entry point. To run the application, use a WSGI server like Gunicorn:")
    print("Example: gunicorn wsgi:application")
