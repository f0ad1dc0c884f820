"""
Seeds the ledger with a demo transaction graph for trace exploration.

Shape:
- 40 parties exchanging ~200 random transfers
- A 3-party laundering ring (ring_a -> ring_b -> ring_c -> ring_a), repeated
  with distinct ids so traces from the ring hit the 100-transaction cap
- A self-transfer on acct_0000
- A handful of flagged transfers and KYC tags
"""
import sys
import os
import random
import time

# Allow running from project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flowledger.database import engine, SessionLocal
from flowledger.config import LEDGER_WRITERS
from flowledger import models
from flowledger.services.authorization import AllowListAuthorizer
from flowledger.services.kyc import KycRegistry
from flowledger.services.ledger import Ledger
from flowledger.services.notifier import LoggingNotifier

random.seed(42)

SEED_WRITER = LEDGER_WRITERS[0] if LEDGER_WRITERS else "owner"
PARTIES = [f"acct_{i:04d}" for i in range(40)]
RING = ["ring_a", "ring_b", "ring_c"]
KYC_TAGS = ["verified", "pending_review", "high_risk", "pep"]


def generate_transfers():
    transfers = []

    # --- 1. Random transfers between regular accounts ---
    for i in range(200):
        sender, receiver = random.sample(PARTIES, 2)
        transfers.append((f"tx_{i:05d}", sender, receiver, random.randint(100, 500000)))

    # --- 2. Ring cycling funds with fresh ids every lap ---
    for lap in range(40):
        for j, sender in enumerate(RING):
            receiver = RING[(j + 1) % len(RING)]
            transfers.append((f"ring_{lap:03d}_{j}", sender, receiver, 9900 - lap))

    # Entry into the ring from a regular account
    transfers.append(("ring_entry", PARTIES[1], RING[0], 250000))

    # --- 3. Self-transfer ---
    transfers.append(("self_0000", PARTIES[0], PARTIES[0], 1000))

    return transfers


def main():
    print("Creating database tables...")
    models.Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        existing = db.query(models.Transaction).count()
        if existing > 0:
            print(f"Ledger already has {existing} transactions. Skipping seed.")
            return

        authorizer = AllowListAuthorizer([SEED_WRITER])
        notifier = LoggingNotifier()
        ledger = Ledger(db, authorizer, notifier)
        kyc = KycRegistry(db, authorizer, notifier)

        print("Recording transactions...")
        now = int(time.time())
        transfers = generate_transfers()
        for offset, (transaction_id, sender, receiver, amount) in enumerate(transfers):
            ledger.record(SEED_WRITER, transaction_id, sender, receiver, amount, now + offset)

        for transaction_id in random.sample([t[0] for t in transfers], 8):
            ledger.flag(SEED_WRITER, transaction_id, "Seeded: unusual transfer pattern")
        ledger.flag(SEED_WRITER, "ring_entry", "Seeded: entry into circular flow")

        for party in PARTIES[:10] + RING:
            kyc.set_tag(SEED_WRITER, party, random.choice(KYC_TAGS))

        count = db.query(models.Transaction).count()
        print(f"Successfully seeded {count} transactions.")
        print(f"Flagged: {len(ledger.list_flagged(limit=1000))}")

    finally:
        db.close()


if __name__ == "__main__":
    main()
