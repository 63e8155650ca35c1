import pytest

from meat_core.filters import FilterSelection, apply_filters, prepare_context
from meat_core.metrics import (
    avg_price_per_kg,
    compute_overview,
    month_key,
    revenue_by_cut,
    revenue_by_month,
    revenue_by_region,
    total_revenue,
    total_weight,
    transaction_count,
)
from meat_core.records import empty_dataset, records_to_frame, SalesRecord


def test_cairo_end_to_end(sample):
    view = apply_filters(sample, FilterSelection(region="Cairo", channel="All"))

    assert view["meat_cut"].tolist() == ["Liver", "Round"]
    assert transaction_count(view) == 2
    assert total_revenue(view) == pytest.approx(4805.53 + 13659.38)
    assert total_revenue(view) == pytest.approx(18464.91)


def test_kpis_over_full_sample(sample):
    assert transaction_count(sample) == 10
    assert total_revenue(sample) == pytest.approx(82428.47)
    assert total_weight(sample) == pytest.approx(307.08)
    assert avg_price_per_kg(sample) == pytest.approx(82428.47 / 307.08)


def test_filtered_total_matches_matching_records(sample):
    view = apply_filters(sample, FilterSelection(region="Giza"))
    expected = sample.loc[sample["region"] == "Giza", "revenue"].sum()
    assert total_revenue(view) == pytest.approx(expected)


def test_empty_view_is_all_zeros():
    view = empty_dataset()

    assert total_revenue(view) == 0
    assert total_weight(view) == 0
    assert avg_price_per_kg(view) == 0
    assert transaction_count(view) == 0
    assert revenue_by_cut(view).empty
    assert revenue_by_region(view).empty
    assert revenue_by_month(view).empty


def test_avg_price_guard_on_zero_weight():
    view = records_to_frame([SalesRecord("2024-01-01", "Liver", 0.0, 100.0, "Cairo", "Retail", "x", "No", 0.0)])
    assert avg_price_per_kg(view) == 0


def test_revenue_by_cut_sorted_descending_and_sums_to_total(sample):
    by_cut = revenue_by_cut(sample)
    values = by_cut["value"].tolist()

    assert values == sorted(values, reverse=True)
    assert by_cut.loc[0, "name"] == "Short Ribs"
    assert by_cut.loc[0, "value"] == pytest.approx(18218.25 + 13169.63)
    assert sum(values) == pytest.approx(total_revenue(sample))
    assert by_cut["name"].is_unique


def test_revenue_by_cut_ties_keep_first_seen_order():
    view = records_to_frame(
        [
            SalesRecord("2024-01-01", "Liver", 1.0, 1.0, "Cairo", "Retail", "x", "No", 5.0),
            SalesRecord("2024-01-01", "Flank", 1.0, 1.0, "Cairo", "Retail", "x", "No", 5.0),
            SalesRecord("2024-01-01", "Round", 1.0, 1.0, "Cairo", "Retail", "x", "No", 9.0),
        ]
    )
    assert revenue_by_cut(view)["name"].tolist() == ["Round", "Liver", "Flank"]


def test_revenue_by_region_first_seen_order(sample):
    by_region = revenue_by_region(sample)

    assert by_region["name"].tolist() == ["Cairo", "Delta", "Alexandria", "Upper Egypt", "Giza"]
    assert by_region.loc[0, "value"] == pytest.approx(18464.91)


def test_revenue_by_month_sorted_by_key(sample):
    by_month = revenue_by_month(sample)
    keys = by_month["name"].tolist()

    assert keys == sorted(keys)
    assert set(keys) == {month_key(d) for d in sample["date"]}
    july = by_month.loc[by_month["name"] == "2024-07", "value"].iloc[0]
    assert july == pytest.approx(4286.27 + 7101.02)


def test_month_key_takes_prefix_without_validation():
    assert month_key("2024-03-12") == "2024-03"
    assert month_key("2024") == "2024"
    assert month_key("12/03/2024") == "12/03/2"


def test_compute_overview_payload(sample):
    sel = FilterSelection(region="Cairo")
    payload = compute_overview(sel, prepare_context(sel, sample))

    assert payload["filters"] == {"region": "Cairo", "channel": "All"}
    assert payload["kpis"]["transaction_count"] == 2
    assert payload["kpis"]["total_revenue"] == pytest.approx(18464.91)
    assert [p["name"] for p in payload["series"]["revenue_by_cut"]] == ["Round", "Liver"]
    assert payload["series"]["revenue_by_month"][0] == {"name": "2024-03", "value": pytest.approx(13659.38)}
    assert payload["options"]["regions"][0] == "All"
    assert payload["row_counts"] == {"dataset": 10, "filtered": 2}
    assert set(payload["charts"]) == {"revenue_by_cut", "regional_split", "revenue_trend"}


def test_compute_overview_on_empty_view(sample):
    sel = FilterSelection(region="Nowhere")
    payload = compute_overview(sel, prepare_context(sel, sample), include_charts=False)

    assert payload["kpis"] == {
        "total_revenue": 0.0,
        "total_weight": 0.0,
        "avg_price_per_kg": 0.0,
        "transaction_count": 0,
    }
    assert payload["series"] == {"revenue_by_cut": [], "revenue_by_region": [], "revenue_by_month": []}
    assert payload["charts"] == {}
