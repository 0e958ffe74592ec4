"""Static fixtures and generators for DemoBlaze scenarios.

The literal dialog/confirmation strings below are part of the contract with
the remote application and must match it exactly.
"""

import re
import time
import uuid

from faker import Faker

from .models import Category, ContactMessage, Credentials, OrderDetails

fake = Faker()

# Dialog and panel texts produced by the remote application
PRODUCT_ADDED = "Product added"
SIGNUP_SUCCESS = "Sign up successful"
USER_EXISTS = "This user already exist"
PURCHASE_THANKS = "Thank you for your purchase!"
MESSAGE_THANKS = "Thanks for the message!!"
LOGIN_REJECTION_PATTERN = re.compile(r"(Wrong password|User does not exist)")
CONTACT_MODAL_TITLE = "New message"

CATEGORIES = list(Category)


class Products:
    """Exact product names as shown in the catalogue."""

    PHONE = "Samsung galaxy s6"
    PHONE2 = "Nokia lumia 1520"
    LAPTOP = "Sony vaio i5"
    LAPTOP2 = "MacBook air"
    MONITOR = "ASUS Full HD"


EXISTING_USER = Credentials(username="sathish_demo_user", password="Demo@Pass456")
INVALID_USER = Credentials(username="invalid_user", password="wrong_password")

VALID_CONTACT = ContactMessage(
    email="pom.qa.testing@example.com",
    name="QA Automation",
    message="Testing contact functionality - automated test execution.",
)
INVALID_CONTACT = ContactMessage(email="invalid-email-format", name="", message="")
LONG_MESSAGE_CONTACT = ContactMessage(
    email="test.long@example.com",
    name="Test User",
    message="A" * 500,
)
SPECIAL_CHARACTERS_CONTACT = ContactMessage(
    email="special+test@domain-name.co.uk",
    name="Test-User_123",
    message="Testing special chars: !@#$%^&*()_+-=[]{}|;:,.<>?",
)

ORDER_CUSTOMER = OrderDetails(
    name="Sathish Kumar",
    country="India",
    city="Bangalore",
    card_number="4111111111111111",
    expiry_month="03",
    expiry_year="2026",
)
MASTERCARD_ORDER = OrderDetails(
    name="Test MasterCard User",
    country="United States",
    city="San Francisco",
    card_number="5555555555554444",
    expiry_month="06",
    expiry_year="2027",
)
EXPIRED_CARD_ORDER = OrderDetails(
    name="Expired Card Test",
    country="Canada",
    city="Toronto",
    card_number="4111111111111111",
    expiry_month="01",
    expiry_year="2023",
)


def unique_suffix() -> str:
    """Millisecond timestamp plus a random token.

    Concurrent scenarios share the remote user table, so every generated
    username or email carries one of these.
    """
    return f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def generate_credentials(prefix: str = "pom_auto") -> Credentials:
    return Credentials(username=f"{prefix}_{unique_suffix()}", password="MySecure@Pass123!")


def generate_email(prefix: str = "pom.qa") -> str:
    return f"{prefix}.{unique_suffix()}@testautomation.dev"


def generate_contact_message() -> ContactMessage:
    return ContactMessage(
        email=generate_email(),
        name=f"QA Tester {fake.first_name()} {uuid.uuid4().hex[:6].upper()}",
        message=f"Automated test message - {fake.sentence(nb_words=8)} | Run {unique_suffix()}",
    )


def generate_order_details() -> OrderDetails:
    expiry = fake.future_date(end_date="+1500d")
    return OrderDetails(
        name=fake.name(),
        country=fake.country(),
        city=fake.city(),
        card_number=fake.credit_card_number(card_type="visa16"),
        expiry_month=f"{expiry.month:02d}",
        expiry_year=str(expiry.year),
    )
