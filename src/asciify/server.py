"""HTTP upload-and-convert endpoint.

POST /convert takes a multipart form with an ``image`` file and the same
options as the command line, and answers ``{"ascii": ...}`` or
``{"error": ...}``. GET / serves a small form for trying it out.

Usage: asciify-server --port 8080
"""

import argparse
import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from asciify.converter import image_to_ascii
from asciify.decoder import DecodeError, decode_image
from asciify.options import InvalidConfiguration, build_options
from asciify.sampling import target_size

MAX_UPLOAD_BYTES = 10 << 20
TRUTHY = {"true", "on", "1"}

INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>ASCII Art Converter</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
    form { display: flex; flex-direction: column; gap: 10px; }
    pre { white-space: pre; font-family: monospace; background: #f5f5f5; padding: 10px; }
  </style>
</head>
<body>
  <h1>ASCII Art Converter</h1>
  <form id="convertForm">
    <label>Image: <input type="file" name="image" accept="image/*" required></label>
    <label>Width: <input type="number" name="width" value="80"></label>
    <label>Height: <input type="number" name="height" value="0"></label>
    <label>Charset: <input type="text" name="charset" value=" .:-=+*#%@"></label>
    <label>Colored: <input type="checkbox" name="colored" value="true"></label>
    <label>Inverted: <input type="checkbox" name="inverted" value="true"></label>
    <button type="submit">Convert</button>
  </form>
  <pre id="output"></pre>
  <script>
    document.getElementById("convertForm").onsubmit = async (e) => {
      e.preventDefault();
      const output = document.getElementById("output");
      try {
        const response = await fetch("/convert", { method: "POST", body: new FormData(e.target) });
        const data = await response.json();
        output.textContent = data.error ? "Error: " + data.error : data.ascii;
      } catch (err) {
        output.textContent = "Error: " + err.message;
      }
    };
  </script>
</body>
</html>
"""


def _int_field(name):
    """Form integer, or None when missing or unparseable."""
    value = request.form.get(name, "")
    try:
        return int(value)
    except ValueError:
        return None


def _bool_field(name):
    return request.form.get(name, "").lower() in TRUTHY


def _error(message, status):
    return jsonify({"error": message}), status


def create_app(config=None):
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    if config:
        app.config.update(config)

    @app.route("/")
    def index():
        return INDEX_HTML

    @app.route("/convert", methods=["POST"])
    def convert_upload():
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            return _error("No image file provided", 400)

        try:
            options = build_options(
                width=_int_field("width"),
                height=_int_field("height"),
                charset=request.form.get("charset") or None,
                colored=_bool_field("colored"),
                inverted=_bool_field("inverted"),
            )
            image = decode_image(upload.stream)
            ascii_art = image_to_ascii(image, options)
        except (DecodeError, InvalidConfiguration) as exc:
            return _error(str(exc), 400)

        cols, rows = target_size(image.width, image.height, options.width, options.height)
        app.logger.info("Converted %s from %dx%d to %dx%d", upload.filename, image.width, image.height, cols, rows)
        return jsonify({"ascii": ascii_art})

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return _error(exc.description, exc.code)

    @app.errorhandler(Exception)
    def unexpected_error(exc):
        app.logger.exception("Conversion failed")
        return _error(f"Conversion failed: {exc}", 500)

    return app


def main():
    parser = argparse.ArgumentParser(description="Serve the ASCII art converter over HTTP")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on (default: 8080)")
    parser.add_argument("--debug", action="store_true", default=False, help="Run Flask in debug mode")
    args = parser.parse_args()

    app = create_app()
    app.logger.setLevel(logging.INFO)
    app.logger.info("Server starting on http://%s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)
