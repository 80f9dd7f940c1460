"""Demonstration dataset used to seed an empty transaction store."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal

from shared.models import Transaction, TransactionType


# (id, title, amount, type, category, description, date)
_SAMPLE_ROWS: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    ("1", "Salary Payment", "5000000", "income", "Salary", "Monthly salary payment", "2024-01-01"),
    ("2", "Grocery Shopping", "150000", "expense", "Food", "Weekly grocery shopping at supermarket", "2024-01-02"),
    ("3", "Freelance Project", "2500000", "income", "Freelance", "Web development project payment", "2024-01-03"),
    ("4", "Coffee Shop", "45000", "expense", "Food", "Morning coffee and breakfast", "2024-01-04"),
    ("5", "Uber Ride", "35000", "expense", "Transportation", "Ride to office", "2024-01-05"),
    ("6", "Investment Return", "750000", "income", "Investment", "Monthly investment return", "2024-01-06"),
    ("7", "Shopping Mall", "320000", "expense", "Shopping", "New clothes and accessories", "2024-01-07"),
    ("8", "Electricity Bill", "250000", "expense", "Utilities", "Monthly electricity bill payment", "2024-01-08"),
    ("9", "Cinema Tickets", "80000", "expense", "Entertainment", "Movie tickets for weekend", "2024-01-09"),
    ("10", "Gas Station", "200000", "expense", "Transportation", "Car fuel refill", "2024-01-10"),
    ("11", "Bonus Payment", "1500000", "income", "Bonus", "Performance bonus", "2024-01-11"),
    ("12", "Restaurant Dinner", "180000", "expense", "Food", "Dinner with family", "2024-01-12"),
    ("13", "Online Course", "450000", "expense", "Education", "Programming course subscription", "2024-01-13"),
    ("14", "Gift from Parents", "1000000", "income", "Gift", "Birthday gift money", "2024-01-14"),
    ("15", "Internet Bill", "300000", "expense", "Utilities", "Monthly internet subscription", "2024-01-15"),
    ("16", "Salary Payment", "5000000", "income", "Salary", "Monthly salary payment", "2024-02-01"),
    ("17", "Doctor Visit", "500000", "expense", "Healthcare", "Regular health checkup", "2024-02-02"),
    ("18", "Freelance Design", "1800000", "income", "Freelance", "Logo design project", "2024-02-03"),
    ("19", "Grocery Shopping", "175000", "expense", "Food", "Weekly groceries", "2024-02-04"),
    ("20", "Spotify Premium", "55000", "expense", "Entertainment", "Music streaming subscription", "2024-02-05"),
    ("21", "Investment Dividend", "650000", "income", "Investment", "Stock dividend payment", "2024-02-06"),
    ("22", "Phone Bill", "150000", "expense", "Utilities", "Monthly phone bill", "2024-02-07"),
    ("23", "Bus Ticket", "25000", "expense", "Transportation", "Daily commute", "2024-02-08"),
    ("24", "Book Purchase", "120000", "expense", "Education", "Programming books", "2024-02-09"),
    ("25", "Lunch Meeting", "95000", "expense", "Food", "Business lunch", "2024-02-10"),
    ("26", "Consulting Fee", "3200000", "income", "Freelance", "IT consulting project", "2024-02-11"),
    ("27", "Gym Membership", "250000", "expense", "Healthcare", "Monthly gym subscription", "2024-02-12"),
    ("28", "Netflix Subscription", "65000", "expense", "Entertainment", "Monthly streaming service", "2024-02-13"),
    ("29", "Car Maintenance", "800000", "expense", "Transportation", "Car service and oil change", "2024-02-14"),
    ("30", "Fast Food", "55000", "expense", "Food", "Quick dinner", "2024-02-15"),
    ("31", "Salary Payment", "5200000", "income", "Salary", "Monthly salary with raise", "2024-03-01"),
    ("32", "Water Bill", "85000", "expense", "Utilities", "Monthly water bill", "2024-03-02"),
    ("33", "Side Project", "2200000", "income", "Freelance", "Mobile app development", "2024-03-03"),
    ("34", "Pharmacy", "75000", "expense", "Healthcare", "Vitamins and medicines", "2024-03-04"),
    ("35", "Coffee Subscription", "180000", "expense", "Food", "Monthly coffee beans delivery", "2024-03-05"),
    ("36", "Investment Profit", "1100000", "income", "Investment", "Crypto trading profit", "2024-03-06"),
    ("37", "Gaming Purchase", "350000", "expense", "Entertainment", "New video game", "2024-03-07"),
    ("38", "Taxi Ride", "45000", "expense", "Transportation", "Airport transfer", "2024-03-08"),
    ("39", "Online Workshop", "650000", "expense", "Education", "UI/UX design workshop", "2024-03-09"),
    ("40", "Pizza Night", "135000", "expense", "Food", "Family pizza dinner", "2024-03-10"),
    ("41", "Freelance Article", "800000", "income", "Freelance", "Technical writing project", "2024-03-11"),
    ("42", "Clothing Store", "450000", "expense", "Shopping", "New work clothes", "2024-03-12"),
    ("43", "Concert Ticket", "275000", "expense", "Entertainment", "Music concert", "2024-03-13"),
    ("44", "Parking Fee", "15000", "expense", "Transportation", "Mall parking", "2024-03-14"),
    ("45", "Gift Money", "500000", "income", "Gift", "Wedding gift received", "2024-03-15"),
    ("46", "Salary Payment", "5200000", "income", "Salary", "Monthly salary payment", "2024-04-01"),
    ("47", "Insurance Premium", "350000", "expense", "Healthcare", "Health insurance monthly payment", "2024-04-02"),
    ("48", "Bakery Visit", "85000", "expense", "Food", "Fresh bread and pastries", "2024-04-03"),
    ("49", "Train Ticket", "125000", "expense", "Transportation", "Weekend trip", "2024-04-04"),
    ("50", "Tutoring Income", "1200000", "income", "Other", "Private programming lessons", "2024-04-05"),
    ("51", "Payment from Agus", "850000", "income", "Freelance", "Website design project for Agus Company", "2024-04-06"),
    ("52", "Lunch with Agus", "125000", "expense", "Food", "Business lunch meeting with Agus at restaurant", "2024-04-07"),
    ("53", "Agus Birthday Gift", "200000", "expense", "Other", "Birthday gift for Agus colleague", "2024-04-08"),
    ("54", "Consulting for Agus Store", "1500000", "income", "Freelance", "E-commerce consultation for Agus retail store", "2024-04-09"),
    ("55", "Car Rental with Agus", "300000", "expense", "Transportation", "Split car rental cost with Agus for business trip", "2024-04-10"),
    ("56", "Agus Project Bonus", "500000", "income", "Bonus", "Bonus for completing Agus project ahead of schedule", "2024-04-11"),
    ("57", "Dinner with Agus Team", "220000", "expense", "Food", "Team dinner with Agus and colleagues", "2024-04-12"),
    ("58", "Agus Office Supplies", "95000", "expense", "Shopping", "Office supplies purchased for Agus project", "2024-04-13"),
    ("59", "Agus Freelance Payment", "1200000", "income", "Freelance", "Freelance payment received from Agus", "2024-04-14"),
    ("60", "Agus Transportation", "175000", "expense", "Transportation", "Transportation costs for Agus client meeting", "2024-04-15"),
)


def sample_transactions() -> list[Transaction]:
    """Return the demonstration dataset, newest date first."""

    transactions = [
        Transaction(
            id=row_id,
            title=title,
            description=description,
            amount=Decimal(amount),
            type=TransactionType(transaction_type),
            category=category,
            date=date.fromisoformat(raw_date),
            created_at=datetime.combine(date.fromisoformat(raw_date), time.min, tzinfo=timezone.utc),
        )
        for row_id, title, amount, transaction_type, category, description, raw_date in _SAMPLE_ROWS
    ]
    return sorted(transactions, key=lambda transaction: transaction.date, reverse=True)
