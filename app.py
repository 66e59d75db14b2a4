import os

from src.dispatch_control.dispatch_control.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "3000")), debug=bool(app.config.get("DEBUG", False)))
