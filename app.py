from flask import Flask
from mrprime.api import mr_bp
from mrprime.config import load_settings

app = Flask(__name__)
app.config["MR_SETTINGS"] = load_settings()
app.register_blueprint(mr_bp)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080)
