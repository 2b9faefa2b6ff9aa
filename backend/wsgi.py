import os
import sys

from blockcms import create_app

app = create_app(os.getenv("APP_CONFIG", "production"))

if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else int(os.getenv("PORT", "8080"))
    print(f" * Running on http://127.0.0.1:{port}")
    app.run(host="127.0.0.1", port=port, debug=False)
