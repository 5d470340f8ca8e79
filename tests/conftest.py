import pytest

from app import app as flask_app

EXAMPLE_ANSWERS = {
    "productName": "Coffee from a street kiosk",
    "businessType": "street",
    "targetCustomer": "Commuters",
    "problemSolved": "No time for breakfast",
    "pricePoint": "5",
    "costPrice": "1.5",
    "dailyTraffic": "1500",
    "conversionRate": "2",
    "monthlyExpenses": "500",
    "initialInvestment": "1000",
}


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True, SECRET_KEY="test-secret")
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def example_answers():
    return dict(EXAMPLE_ANSWERS)
