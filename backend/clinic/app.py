import logging
import os

from clinic.main import create_app

logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    # PORT from the environment in production, 5000 for local dev
    port = int(os.getenv("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_ENV") == "development")
