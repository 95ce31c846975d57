"""
db/placeholder_data.py
----------------------
Sample rows used to seed a fresh dashboard database.
User passwords are plaintext here and hashed by the seeder.
"""

from datetime import date

from models.customer import Customer
from models.invoice import Invoice
from models.revenue import Revenue
from models.user import User

USERS = [
    User(
        id="410544b2-4001-4271-9855-fec4b6a6442a",
        name="User",
        email="user@nextmail.com",
        password="123456",
    ),
]

CUSTOMERS = [
    Customer(
        id="d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        name="Evil Rabbit",
        email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    ),
    Customer(
        id="3958dc9e-712f-4377-85e9-fec4b6a6442a",
        name="Delba de Oliveira",
        email="delba@oliveira.com",
        image_url="/customers/delba-de-oliveira.png",
    ),
    Customer(
        id="3958dc9e-742f-4377-85e9-fec4b6a6442a",
        name="Lee Robinson",
        email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    ),
    Customer(
        id="76d65c26-f784-44a2-ac19-586678f7c2f2",
        name="Michael Novotny",
        email="michael@novotny.com",
        image_url="/customers/michael-novotny.png",
    ),
    Customer(
        id="cc27c14a-0acf-4f4a-a6c9-d45682c144b9",
        name="Amy Burns",
        email="amy@burns.com",
        image_url="/customers/amy-burns.png",
    ),
    Customer(
        id="13d07535-c59e-4157-a011-f8d2ef4e0cbb",
        name="Balazs Orban",
        email="balazs@orban.com",
        image_url="/customers/balazs-orban.png",
    ),
]

_C = [c.id for c in CUSTOMERS]

# (customer index, amount in cents, status, date)
_INVOICE_ROWS = [
    (0, 15795, "pending", date(2022, 12, 6)),
    (1, 20348, "pending", date(2022, 11, 14)),
    (4, 3040, "paid", date(2022, 10, 29)),
    (3, 44800, "paid", date(2023, 9, 10)),
    (5, 34577, "pending", date(2023, 8, 5)),
    (2, 54246, "pending", date(2023, 7, 16)),
    (0, 666, "pending", date(2023, 6, 27)),
    (3, 32545, "paid", date(2023, 6, 9)),
    (4, 1250, "paid", date(2023, 6, 17)),
    (5, 8546, "paid", date(2023, 6, 7)),
    (1, 500, "paid", date(2023, 8, 19)),
    (5, 8945, "paid", date(2023, 6, 3)),
    (2, 1000, "paid", date(2022, 6, 5)),
]

INVOICES = [
    Invoice(customer_id=_C[idx], amount=amount, status=status, date=day)
    for idx, amount, status, day in _INVOICE_ROWS
]

REVENUE = [
    Revenue(month="Jan", revenue=2000),
    Revenue(month="Feb", revenue=1800),
    Revenue(month="Mar", revenue=2200),
    Revenue(month="Apr", revenue=2500),
    Revenue(month="May", revenue=2300),
    Revenue(month="Jun", revenue=3200),
    Revenue(month="Jul", revenue=3500),
    Revenue(month="Aug", revenue=3700),
    Revenue(month="Sep", revenue=2500),
    Revenue(month="Oct", revenue=2800),
    Revenue(month="Nov", revenue=3000),
    Revenue(month="Dec", revenue=4800),
]
