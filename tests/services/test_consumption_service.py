import logging
from datetime import date
from unittest.mock import MagicMock

from aquabill.models.connection import Connection
from aquabill.models.reading import MeterReading
from aquabill.services.consumption_service import ConsumptionService, is_high_consumption

TODAY = date(2024, 6, 30)


def _reading(day: date, units: float, connection_id: int = 1) -> MeterReading:
    return MeterReading(connection_id=connection_id, reading_date=day, units_consumed=units)


class TestIsHighConsumption:
    def test_above_threshold(self):
        assert is_high_consumption(101) is True

    def test_at_threshold(self):
        assert is_high_consumption(100) is False

    def test_string_input(self):
        assert is_high_consumption("150") is True

    def test_garbage_input(self):
        assert is_high_consumption(None) is False


class TestConsumptionService:
    def setup_method(self):
        self.reading_repo = MagicMock()
        self.connection_repo = MagicMock()
        self.service = ConsumptionService(self.reading_repo, self.connection_repo)
        self.reading_repo.list_by_connection.return_value = [
            _reading(date(2024, 6, 10), 80),
            _reading(date(2023, 11, 20), 500),
            _reading(date(2024, 4, 10), 40),
            _reading(date(2024, 5, 10), 60),
        ]

    def test_average_consumption_ignores_old_readings(self):
        assert self.service.average_consumption(1, today=TODAY) == 60

    def test_average_consumption_short_window(self):
        assert self.service.average_consumption(1, months=1, today=TODAY) == 80

    def test_average_consumption_no_readings(self):
        self.reading_repo.list_by_connection.return_value = []
        assert self.service.average_consumption(1, today=TODAY) == 0

    def test_abnormal_against_average(self):
        assert self.service.is_abnormal_consumption(95, 1, today=TODAY) is True
        assert self.service.is_abnormal_consumption(85, 1, today=TODAY) is False

    def test_abnormal_falls_back_to_threshold(self):
        self.reading_repo.list_by_connection.return_value = []
        assert self.service.is_abnormal_consumption(150, 1, today=TODAY) is True
        assert self.service.is_abnormal_consumption(50, 1, today=TODAY) is False

    def test_trend_increasing(self):
        trend = self.service.consumption_trend(1, today=TODAY)
        assert trend.trend == "increasing"
        assert trend.change == 100
        assert trend.readings == 3
        assert trend.first_reading == date(2024, 4, 10)
        assert trend.last_reading == date(2024, 6, 10)

    def test_trend_decreasing(self):
        self.reading_repo.list_by_connection.return_value = [
            _reading(date(2024, 4, 1), 80),
            _reading(date(2024, 6, 1), 40),
        ]
        trend = self.service.consumption_trend(1, today=TODAY)
        assert trend.trend == "decreasing"
        assert trend.change == -50

    def test_trend_stable_within_band(self):
        self.reading_repo.list_by_connection.return_value = [
            _reading(date(2024, 4, 1), 100),
            _reading(date(2024, 6, 1), 105),
        ]
        assert self.service.consumption_trend(1, today=TODAY).trend == "stable"

    def test_trend_single_reading(self):
        self.reading_repo.list_by_connection.return_value = [_reading(date(2024, 6, 1), 10)]
        trend = self.service.consumption_trend(1, today=TODAY)
        assert trend.trend == "stable"
        assert trend.change == 0
        assert trend.readings == 1

    def test_monthly_consumption(self):
        self.connection_repo.list_by_user.return_value = [Connection(id=1, user_id=7), Connection(id=2, user_id=7)]
        self.reading_repo.list_by_connections.return_value = [
            _reading(date(2024, 6, 1), 20),
            _reading(date(2024, 5, 3), 30),
            _reading(date(2024, 5, 20), 45, connection_id=2),
            _reading(date(2023, 10, 1), 999),
        ]

        months = self.service.monthly_consumption(7, today=TODAY)

        self.reading_repo.list_by_connections.assert_called_once_with([1, 2])
        assert [m.month for m in months] == ["2024-05", "2024-06"]
        assert months[0].total_consumption == 75
        assert months[0].reading_count == 2
        assert months[0].average_consumption == 37.5
        assert months[1].total_consumption == 20

    def test_monthly_consumption_no_connections(self):
        self.connection_repo.list_by_user.return_value = []
        self.reading_repo.list_by_connections.return_value = []
        assert self.service.monthly_consumption(7, today=TODAY) == []

    def test_alert_high(self):
        alert = self.service.check_alert(150, 1, today=TODAY)
        assert alert.should_alert is True
        assert alert.type == "High Consumption"
        assert alert.severity == "high"
        assert "150 units" in alert.message

    def test_alert_abnormal(self):
        alert = self.service.check_alert(95, 1, today=TODAY)
        assert alert.should_alert is True
        assert alert.severity == "medium"

    def test_no_alert(self):
        assert self.service.check_alert(50, 1, today=TODAY).should_alert is False

    def test_summary_for_connection(self):
        summary = self.service.consumption_summary(1)
        self.reading_repo.list_by_connection.assert_called_once_with(1)
        assert summary.stats.count == 4
        assert summary.stats.max == 500
        assert summary.trend.trend == "decreasing"

    def test_summary_all_readings(self):
        self.reading_repo.list_all.return_value = []
        summary = self.service.consumption_summary()
        assert summary.stats.count == 0
        assert summary.trend.trend == "stable"

    def test_record_reading(self, caplog):
        reading = _reading(date(2024, 6, 30), 150)
        self.reading_repo.create.return_value = reading.model_copy(update={"id": 12})

        with caplog.at_level(logging.WARNING, logger="aquabill.services.consumption_service"):
            created, alert = self.service.record_reading(reading, today=TODAY)

        self.reading_repo.create.assert_called_once_with(reading)
        assert created.id == 12
        assert alert.should_alert is True
        assert "High consumption detected" in caplog.text

    def test_record_reading_without_connection(self):
        reading = MeterReading(reading_date=date(2024, 6, 30), units_consumed=500)
        self.reading_repo.create.return_value = reading

        _, alert = self.service.record_reading(reading, today=TODAY)

        assert alert.should_alert is False
        self.reading_repo.list_by_connection.assert_not_called()
