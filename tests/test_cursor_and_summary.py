# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date

from dailyglow.journal.cursor import DateCursor
from dailyglow.journal.models import AppDocument, ExerciseItem, FoodItem, MealType, Profile
from dailyglow.journal.store import add_exercise, add_food, toggle_exercise, update_day_log
from dailyglow.journal.summary import (
    bmi,
    bmi_status,
    calculate_age,
    calories_by_meal,
    day_totals,
    medication_history,
    weight_trend,
)


class TestDateCursor(unittest.TestCase):
    def test_defaults_to_today(self) -> None:
        self.assertEqual(DateCursor().key, date.today().isoformat())

    def test_month_and_year_rollover(self) -> None:
        self.assertEqual(DateCursor("2023-02-28").shift(1), "2023-03-01")
        self.assertEqual(DateCursor("2024-02-28").shift(1), "2024-02-29")
        self.assertEqual(DateCursor("2024-01-01").shift(-1), "2023-12-31")
        self.assertEqual(DateCursor("2024-12-31").shift(1), "2025-01-01")

    def test_shift_accumulates(self) -> None:
        cursor = DateCursor(date(2024, 3, 30))
        cursor.shift(2)
        cursor.shift(-5)
        self.assertEqual(cursor.key, "2024-03-27")

    def test_select_rejects_bad_dates(self) -> None:
        with self.assertRaises(ValueError):
            DateCursor().select("2023-02-29")


class TestDaySummary(unittest.TestCase):
    def setUp(self) -> None:
        doc = add_food(
            AppDocument(),
            "2024-02-01",
            [
                FoodItem(id="a", name="oatmeal", calories=150.25, protein=5, carbs=27, fat=3),
                FoodItem(id="b", name="salad", calories=220, protein=8, carbs=10, fat=15, meal_type=MealType.lunch),
                FoodItem(id="c", name="yogurt", calories=90, protein=9, carbs=12, fat=0, meal_type=MealType.snack),
            ],
        )
        doc = add_exercise(doc, "2024-02-01", ExerciseItem(id="w", name="walk", duration_minutes=30))
        doc = add_exercise(doc, "2024-02-01", ExerciseItem(id="y", name="yoga", duration_minutes=20))
        self.doc = toggle_exercise(doc, "2024-02-01", "w")

    def test_totals(self) -> None:
        totals = day_totals(self.doc.logs["2024-02-01"])
        self.assertEqual(totals.calories, 460.2)
        self.assertEqual(totals.protein, 22)
        self.assertEqual(totals.completed_exercise_minutes, 30)
        self.assertEqual(totals.food_count, 3)
        self.assertEqual(totals.exercise_count, 2)

    def test_calories_by_meal_in_fixed_order(self) -> None:
        meals = calories_by_meal(self.doc.logs["2024-02-01"])
        self.assertEqual([m.meal_type for m in meals], list(MealType))
        self.assertEqual([m.calories for m in meals], [150.2, 220, 0, 90])
        self.assertEqual(meals[2].food_count, 0)


class TestTrends(unittest.TestCase):
    def test_bmi_status_thresholds(self) -> None:
        self.assertEqual(bmi(60, 170), 20.8)
        self.assertIsNone(bmi(0, 170))
        self.assertIsNone(bmi_status(None))
        self.assertEqual(bmi_status(18.4), "underweight")
        self.assertEqual(bmi_status(22.9), "normal")
        self.assertEqual(bmi_status(23), "overweight")
        self.assertEqual(bmi_status(25), "obese")

    def test_weight_trend_uses_last_logged_days(self) -> None:
        doc = AppDocument(profile=Profile(height=160, target_weight=55))
        for day, weight in [("2024-01-01", 64), ("2024-01-03", 63.5), ("2024-01-08", 63)]:
            doc = update_day_log(doc, day, {"weight": weight})
        doc = update_day_log(doc, "2024-01-08", {"medication_dose": 2.5})

        trend = weight_trend(doc, days=2)
        self.assertEqual([p.date for p in trend.points], ["2024-01-03", "2024-01-08"])
        self.assertIsNone(trend.points[0].medication_weight)
        self.assertEqual(trend.points[1].medication_weight, 63)
        self.assertEqual(trend.latest_weight, 63)
        self.assertEqual(trend.target_weight, 55)
        self.assertEqual(trend.bmi, 24.6)
        self.assertEqual(trend.bmi_status, "overweight")

    def test_weight_trend_empty(self) -> None:
        trend = weight_trend(AppDocument())
        self.assertEqual(trend.points, [])
        self.assertIsNone(trend.latest_weight)
        self.assertIsNone(trend.bmi)

    def test_medication_history(self) -> None:
        doc = AppDocument(profile=Profile(medication_start_date="2024-01-01"))
        doc = update_day_log(doc, "2024-01-01", {"medication_dose": 2.5})
        doc = update_day_log(doc, "2024-01-04", {"weight": 60})
        doc = update_day_log(doc, "2024-01-08", {"medication_dose": 5})

        history = medication_history(doc, today=date(2024, 1, 15))
        self.assertEqual(history.days_since_start, 14)
        self.assertEqual([d.date for d in history.doses], ["2024-01-01", "2024-01-08"])
        self.assertEqual(history.total_mg, 7.5)

    def test_calculate_age(self) -> None:
        self.assertEqual(calculate_age("1990-06-15", date(2024, 6, 14)), 33)
        self.assertEqual(calculate_age("1990-06-15", date(2024, 6, 15)), 34)


if __name__ == "__main__":
    unittest.main()
