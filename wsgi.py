# Sunshine Saree storefront
# Run locally with `python wsgi.py`, or point a WSGI server at `wsgi:app`

import os
from storefront import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
