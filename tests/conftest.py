import pytest

from meat_core.records import sample_dataset

HEADER = "Date,Meat_Cut,Weight_kg,KG_Price,Region,Sales_Channel,Customer_Type,Promo_Applied,Avg_Price"


def csv_text(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


@pytest.fixture
def sample():
    return sample_dataset()


@pytest.fixture
def upload_csv():
    return csv_text(
        "2024-02-01,Brisket,10,200,Cairo,Retail,Supermarket,No,200",
        "2024-02-15,Brisket,5,210,Giza,Online,End Consumer,Yes,210",
        "2024-01-20,Tenderloin,2.5,600,Cairo,Online,Restaurant,No,600",
    )
