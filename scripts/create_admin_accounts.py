# scripts/create_admin_accounts.py
import asyncio

from scoreboard.database import SessionLocal, init_db
from scoreboard.services.setup import create_admin_accounts

init_db()
db = SessionLocal()

try:
    results = asyncio.run(create_admin_accounts(db))
finally:
    db.close()

for result in results:
    outcome = "created" if result.success else f"failed ({result.error})"
    print(f"{result.email}: {outcome}")
