# Development entry point; FLASK_ENV selects the configuration
import os

from app import create_app

app = create_app()

if __name__ == '__main__':
    # The debug setting is controlled from config.py for security
    app.run(debug=app.config.get('DEBUG', False), port=int(os.environ.get('PORT', 5000)))
