"""
Seed development data for GenHPP.

Creates the single-user account, sample calculations (one shared to the
community feed) and a month of expenses for local development.
Idempotent: safe to run multiple times (existing rows are skipped).

Usage:
    python -m genhpp.scripts.seed_dev_data
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from genhpp.core.hpp import calculate_hpp
from genhpp.db.connection import get_db_manager
from genhpp.db.models import Calculation, Expense, PublicCalculation, SiteStatus, User


CALCULATIONS = [
    {
        "product_name": "Keripik Singkong Balado",
        "materials": [
            {"name": "Singkong", "cost": 8000, "qty": 5},
            {"name": "Bumbu Balado", "cost": 15000, "qty": 1},
            {"name": "Minyak Goreng", "cost": 18000, "qty": 2},
        ],
        "labor_cost": Decimal("50000.00"),
        "overhead": Decimal("15000.00"),
        "packaging": Decimal("1500.00"),
        "margin": Decimal("40.00"),
        "product_quantity": 40,
        "is_public": True,
    },
    {
        "product_name": "Kopi Susu Gula Aren",
        "materials": [
            {"name": "Biji Kopi", "cost": 120000, "qty": 1},
            {"name": "Susu UHT", "cost": 18000, "qty": 4},
            {"name": "Gula Aren", "cost": 25000, "qty": 1},
        ],
        "labor_cost": Decimal("75000.00"),
        "overhead": Decimal("20000.00"),
        "packaging": Decimal("2500.00"),
        "margin": Decimal("60.00"),
        "product_quantity": 50,
        "is_public": False,
    },
]

EXPENSES = [
    {"name": "Sewa kios", "amount": Decimal("750000.00"), "category": "Sewa Tempat", "day": 1},
    {"name": "Token listrik", "amount": Decimal("200000.00"), "category": "Listrik & Air", "day": 5},
    {"name": "Iklan Instagram", "amount": Decimal("150000.00"), "category": "Pemasaran", "day": 12},
]


def seed_session(session: Session) -> None:
    """Insert development seed data through an open session."""
    # --- User ---
    user = session.query(User).filter(User.id == 1).first()
    if not user:
        user = User(id=1, name="Dev User", email="dev@genhpp.local", is_admin=True)
        session.add(user)
        session.flush()
        print("Created user: Dev User (id=1)")
    else:
        print("User id=1 already exists, skipping.")

    if not session.get(SiteStatus, 1):
        session.add(SiteStatus(id=1, is_maintenance_mode=False, is_update_mode=False))
        print("Created site status row.")

    # --- Calculations ---
    for calc_data in CALCULATIONS:
        existing = (
            session.query(Calculation)
            .filter(Calculation.user_id == 1, Calculation.product_name == calc_data["product_name"])
            .first()
        )
        if existing:
            print(f"  Calculation '{calc_data['product_name']}' already exists, skipping.")
            continue

        result = calculate_hpp(
            calc_data["materials"],
            calc_data["labor_cost"],
            calc_data["overhead"],
            calc_data["packaging"],
            calc_data["margin"],
        )
        calculation = Calculation(
            user_id=1,
            total_hpp=result["total_hpp"],
            suggested_price=result["suggested_price"],
            **calc_data,
        )
        session.add(calculation)
        session.flush()
        print(f"  Created calculation: {calc_data['product_name']} (HPP {result['total_hpp']:,.0f})")

        if calculation.is_public:
            session.add(
                PublicCalculation(
                    calculation_id=calculation.id,
                    user_id=1,
                    user_name=user.name,
                    product_name=calculation.product_name,
                    materials=calculation.materials,
                    labor_cost=calculation.labor_cost,
                    overhead=calculation.overhead,
                    packaging=calculation.packaging,
                    margin=calculation.margin,
                    product_quantity=calculation.product_quantity,
                    total_hpp=calculation.total_hpp,
                    suggested_price=calculation.suggested_price,
                )
            )
            print("    Shared to community feed.")

    # --- Expenses (current month) ---
    month_start = date.today().replace(day=1)
    for expense_data in EXPENSES:
        expense_date = month_start.replace(day=expense_data["day"])
        existing = (
            session.query(Expense)
            .filter(
                Expense.user_id == 1,
                Expense.name == expense_data["name"],
                Expense.date == expense_date,
            )
            .first()
        )
        if existing:
            print(f"  Expense '{expense_data['name']}' already exists, skipping.")
            continue

        session.add(
            Expense(
                user_id=1,
                name=expense_data["name"],
                amount=expense_data["amount"],
                category=expense_data["category"],
                date=expense_date,
            )
        )
        print(f"  Created expense: {expense_data['name']}")

    session.flush()


def seed():
    """Create tables if needed and insert development seed data."""
    db_manager = get_db_manager()

    print("Ensuring tables exist...")
    db_manager.create_all()

    with db_manager.session() as session:
        seed_session(session)

    print("\nSeed data complete.")


if __name__ == "__main__":
    seed()
