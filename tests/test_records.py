from conftest import csv_text
from meat_core.parser import parse_sales_csv
from meat_core.records import COLUMNS, SAMPLE_RECORDS, SalesRecord, empty_dataset, frame_to_records, sample_dataset


def test_sample_dataset_round_trips_to_records():
    df = sample_dataset()

    assert list(df.columns) == COLUMNS
    assert frame_to_records(df) == SAMPLE_RECORDS


def test_parsed_rows_convert_to_records():
    df = parse_sales_csv(csv_text("2024-05-01,Liver,2,100,Delta,HoReCa,Restaurant,Yes"))

    assert frame_to_records(df) == [
        SalesRecord("2024-05-01", "Liver", 2.0, 100.0, "Delta", "HoReCa", "Restaurant", "Yes", 200.0)
    ]


def test_empty_dataset_has_no_records():
    assert frame_to_records(empty_dataset()) == []
