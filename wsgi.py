"""
WSGI entry point for Shelfkeep
Use this with production WSGI servers like Gunicorn or uWSGI
"""
import os
import sys

from dotenv import load_dotenv

# Load environment variables before the config class is evaluated
load_dotenv()

from app import create_app  # noqa: E402
from app.config import ProductionConfig  # noqa: E402
from app.db import ensure_data_dir, init_db  # noqa: E402

app = create_app(ProductionConfig)

# Initialize database on startup
if __name__ != '__main__':
    # Only initialize when running under WSGI server, not when imported
    try:
        ensure_data_dir(app.config['DATABASE_PATH'])
        init_db(app.config['DATABASE_PATH'])
    except Exception as e:
        print(f"Error during initialization: {e}", file=sys.stderr)
        raise

# WSGI application
application = app

if __name__ == '__main__':
    # For development/testing only
    # In production, use: gunicorn -c gunicorn.conf.py wsgi:application
    ensure_data_dir(app.config['DATABASE_PATH'])
    init_db(app.config['DATABASE_PATH'])
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
