from amortizer.engine.amortization import compute_schedule
from amortizer.engine.export import CSV_HEADERS, format_money, schedule_to_csv, write_csv


class TestFormatMoney:
    def test_two_places(self):
        assert format_money(23258.0462) == "23258.05"
        assert format_money(0.0) == "0.00"
        assert format_money(1500) == "1500.00"

    def test_rounds_exact_binary_value(self):
        """0.125 is exact in binary and rounds up; 2.675 is stored just below."""
        assert format_money(0.125) == "0.13"
        assert format_money(2.675) == "2.67"


class TestScheduleToCsv:
    def test_header(self, fixed_params):
        text = schedule_to_csv(compute_schedule(fixed_params))
        assert text.split("\n")[0] == (
            "Payment #,Beginning Balance,Payment per Period,Principal Paid,Interest Paid,Remaining Balance"
        )
        assert text.split("\n")[0].split(",") == CSV_HEADERS

    def test_one_row_per_period(self, fixed_params):
        text = schedule_to_csv(compute_schedule(fixed_params))
        assert text.endswith("\n")
        lines = text.splitlines()
        assert len(lines) == 241

    def test_first_row(self, fixed_params):
        lines = schedule_to_csv(compute_schedule(fixed_params)).splitlines()
        assert lines[1] == "1,3000000.00,23258.97,5758.97,17500.00,2994241.03"

    def test_last_row_closes_balance(self, fixed_params):
        lines = schedule_to_csv(compute_schedule(fixed_params)).splitlines()
        row = lines[-1].split(",")
        assert row[0] == "240"
        assert row[-1] == "0.00"

    def test_monetary_fields_two_decimals(self, floating_params):
        lines = schedule_to_csv(compute_schedule(floating_params)).splitlines()
        for line in lines[1:]:
            fields = line.split(",")
            assert len(fields) == 6
            for value in fields[1:]:
                assert len(value.split(".")[1]) == 2

    def test_zero_rate_payments(self, zero_rate_params):
        lines = schedule_to_csv(compute_schedule(zero_rate_params)).splitlines()
        assert all(line.split(",")[2] == "8333.33" for line in lines[1:])
        assert all(line.split(",")[4] == "0.00" for line in lines[1:])


class TestWriteCsv:
    def test_writes_file(self, fixed_params, tmp_path):
        schedule = compute_schedule(fixed_params)
        path = write_csv(schedule, tmp_path / "schedule.csv")
        assert path.read_bytes().decode("utf-8") == schedule_to_csv(schedule)
        assert b"\r\n" not in path.read_bytes()
