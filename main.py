"""
Folio
=====

Run the portfolio admin locally.

Visit:
    http://localhost:5000           - Admin login
    http://localhost:5000/admin     - Project dashboard
    http://localhost:5000/projects  - Public portfolio
"""

from folio import create_app
from folio.core.config import Config

app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Folio")
    print("=" * 60)
    print(f"Admin Login:     http://localhost:{Config.port}/")
    print(f"Dashboard:       http://localhost:{Config.port}/admin")
    print(f"Portfolio:       http://localhost:{Config.port}/projects")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
