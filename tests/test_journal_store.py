# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from pydantic import ValidationError

from dailyglow.journal.models import (
    AppDocument,
    DailyLogPatch,
    ExerciseItem,
    FoodItem,
    MealType,
    Profile,
    ProfilePatch,
    SkinCareRoutine,
)
from dailyglow.journal.store import (
    DEFAULT_ROUTINES,
    DuplicateItemError,
    add_exercise,
    add_food,
    remove_food,
    resolve_day_log,
    seed_default_routines,
    toggle_exercise,
    update_day_log,
    update_profile,
    update_skin_care,
)


def _food(food_id: str, name: str = "rice", calories: float = 200) -> FoodItem:
    return FoodItem(id=food_id, name=name, calories=calories, protein=4, carbs=44, fat=0.5, meal_type=MealType.lunch)


class TestResolveDayLog(unittest.TestCase):
    def test_absent_date_returns_empty_template_without_storing(self) -> None:
        doc = AppDocument()
        first = resolve_day_log(doc, "2024-03-01")
        second = resolve_day_log(doc, "2024-03-01")

        self.assertEqual(first, second)
        self.assertEqual(first.date, "2024-03-01")
        self.assertEqual(first.weight, 0)
        self.assertEqual(first.sleep_hours, 0)
        self.assertEqual(first.foods, [])
        self.assertEqual(first.exercises, [])
        self.assertEqual(first.skin_care, SkinCareRoutine())
        self.assertFalse(first.medication_dose)
        self.assertEqual(doc.logs, {})

    def test_existing_log_is_returned_unchanged(self) -> None:
        doc = update_day_log(AppDocument(), "2024-03-01", {"weight": 61.5})
        self.assertIs(resolve_day_log(doc, "2024-03-01"), doc.logs["2024-03-01"])


class TestUpdateDayLog(unittest.TestCase):
    def test_weight_seeded_from_target_then_previous_day(self) -> None:
        doc = AppDocument(profile=Profile(target_weight=60))

        doc = update_day_log(doc, "2024-01-05", {})
        self.assertEqual(doc.logs["2024-01-05"].weight, 60)

        doc = update_day_log(doc, "2024-01-05", {"weight": 58})
        doc = update_day_log(doc, "2024-01-10", {})
        self.assertEqual(doc.logs["2024-01-10"].weight, 58)

    def test_seed_ignores_later_dates_and_zero_weights(self) -> None:
        doc = AppDocument(profile=Profile(target_weight=60))
        doc = update_day_log(doc, "2024-02-10", {"weight": 55})
        doc = update_day_log(doc, "2024-02-01", {})
        self.assertEqual(doc.logs["2024-02-01"].weight, 60)

        doc = update_day_log(doc, "2024-02-11", {"weight": 0})
        doc = update_day_log(doc, "2024-02-12", {})
        self.assertEqual(doc.logs["2024-02-12"].weight, 60)

    def test_date_field_always_matches_key(self) -> None:
        doc = update_day_log(AppDocument(), "2024-01-05", {"date": "1999-01-01", "sleep_hours": 7})
        self.assertEqual(list(doc.logs), ["2024-01-05"])
        self.assertEqual(doc.logs["2024-01-05"].date, "2024-01-05")
        self.assertEqual(doc.logs["2024-01-05"].sleep_hours, 7)

    def test_input_document_is_not_modified(self) -> None:
        before = update_day_log(AppDocument(), "2024-01-05", {"weight": 70})
        after = update_day_log(before, "2024-01-05", {"weight": 69, "medication_dose": 2.5})

        self.assertEqual(before.logs["2024-01-05"].weight, 70)
        self.assertEqual(after.logs["2024-01-05"].weight, 69)
        self.assertEqual(after.logs["2024-01-05"].medication_dose, 2.5)
        self.assertIsNot(before.logs, after.logs)

    def test_negative_values_are_accepted(self) -> None:
        doc = update_day_log(AppDocument(), "2024-01-05", {"weight": -3, "sleep_hours": -1})
        self.assertEqual(doc.logs["2024-01-05"].weight, -3)

    def test_patch_null_clears_dose_and_image_but_keeps_weight(self) -> None:
        doc = update_day_log(AppDocument(), "2024-01-05", {"weight": 70, "medication_dose": 2.5, "body_check_image": "img"})
        patch = DailyLogPatch.model_validate({"weight": None, "medication_dose": None, "body_check_image": None})
        log = update_day_log(doc, "2024-01-05", patch).logs["2024-01-05"]
        self.assertEqual(log.weight, 70)
        self.assertIsNone(log.medication_dose)
        self.assertIsNone(log.body_check_image)


class TestSkinCare(unittest.TestCase):
    def test_field_update_keeps_other_flags(self) -> None:
        doc = update_skin_care(AppDocument(), "2024-01-05", {"morning_wash": True})
        doc = update_skin_care(doc, "2024-01-05", {"notes": "dry cheeks"})
        routine = doc.logs["2024-01-05"].skin_care
        self.assertTrue(routine.morning_wash)
        self.assertFalse(routine.evening_wash)
        self.assertEqual(routine.notes, "dry cheeks")

    def test_wholesale_replacement(self) -> None:
        routine = SkinCareRoutine(evening_shower=True, evening_hair=True)
        doc = update_day_log(AppDocument(), "2024-01-05", {"skin_care": routine})
        self.assertEqual(doc.logs["2024-01-05"].skin_care, routine)


class TestFood(unittest.TestCase):
    def test_add_food_keeps_insertion_order(self) -> None:
        item, item2 = _food("a"), _food("b", name="apple", calories=80)
        doc = add_food(AppDocument(), "2024-02-01", [item])
        doc = add_food(doc, "2024-02-01", [item2])
        self.assertEqual(doc.logs["2024-02-01"].foods, [item, item2])

    def test_add_food_on_new_day_uses_empty_template(self) -> None:
        doc = add_food(AppDocument(profile=Profile(target_weight=60)), "2024-02-01", [_food("a")])
        self.assertEqual(doc.logs["2024-02-01"].weight, 0)

    def test_duplicate_ids_rejected(self) -> None:
        doc = add_food(AppDocument(), "2024-02-01", [_food("a")])
        with self.assertRaises(DuplicateItemError):
            add_food(doc, "2024-02-01", [_food("a")])
        with self.assertRaises(DuplicateItemError):
            add_food(doc, "2024-02-01", [_food("b"), _food("b")])
        self.assertEqual(len(doc.logs["2024-02-01"].foods), 1)

    def test_same_id_allowed_on_another_day(self) -> None:
        doc = add_food(AppDocument(), "2024-02-01", [_food("a")])
        doc = add_food(doc, "2024-02-02", [_food("a")])
        self.assertEqual(len(doc.logs["2024-02-02"].foods), 1)

    def test_remove_food_is_idempotent(self) -> None:
        doc = add_food(AppDocument(), "2024-02-01", [_food("a"), _food("b")])
        once = remove_food(doc, "2024-02-01", "a")
        twice = remove_food(once, "2024-02-01", "a")
        self.assertEqual(once, twice)
        self.assertEqual([f.id for f in twice.logs["2024-02-01"].foods], ["b"])

    def test_remove_food_without_log_is_noop(self) -> None:
        doc = AppDocument()
        self.assertIs(remove_food(doc, "2024-02-01", "a"), doc)


class TestExercise(unittest.TestCase):
    def setUp(self) -> None:
        self.walk = ExerciseItem(id="w", name="walk", duration_minutes=30)
        self.squat = ExerciseItem(id="s", name="squat", duration_minutes=10, reps=20)
        doc = add_exercise(AppDocument(), "2024-02-01", self.walk)
        self.doc = add_exercise(doc, "2024-02-01", self.squat)

    def test_toggle_twice_restores_state(self) -> None:
        once = toggle_exercise(self.doc, "2024-02-01", "w")
        self.assertTrue(once.logs["2024-02-01"].exercises[0].completed)
        self.assertFalse(once.logs["2024-02-01"].exercises[1].completed)

        twice = toggle_exercise(once, "2024-02-01", "w")
        self.assertEqual(twice, self.doc)

    def test_toggle_unknown_id_or_day(self) -> None:
        self.assertEqual(toggle_exercise(self.doc, "2024-02-01", "nope"), self.doc)
        self.assertIs(toggle_exercise(self.doc, "2024-02-02", "w"), self.doc)

    def test_duplicate_exercise_id_rejected(self) -> None:
        with self.assertRaises(DuplicateItemError):
            add_exercise(self.doc, "2024-02-01", ExerciseItem(id="w", name="again"))

    def test_default_routines_only_for_empty_day(self) -> None:
        doc = seed_default_routines(AppDocument(), "2024-02-03")
        exercises = doc.logs["2024-02-03"].exercises
        self.assertEqual([e.name for e in exercises], [r[0] for r in DEFAULT_ROUTINES])
        self.assertEqual(len({e.id for e in exercises}), len(exercises))

        self.assertIs(seed_default_routines(self.doc, "2024-02-01"), self.doc)


class TestProfile(unittest.TestCase):
    def test_shallow_merge(self) -> None:
        doc = update_profile(AppDocument(), {"name": "Mina", "medication_start_date": "2024-01-01"})
        self.assertEqual(doc.profile.name, "Mina")
        self.assertEqual(doc.profile.height, 170)
        self.assertEqual(doc.profile.medication_start_date, "2024-01-01")

    def test_patch_null_clears_medication_start_only(self) -> None:
        doc = update_profile(AppDocument(), ProfilePatch(name="Mina", medication_start_date="2024-01-01"))
        doc = update_profile(doc, ProfilePatch.model_validate({"medication_start_date": None, "name": None}))
        self.assertIsNone(doc.profile.medication_start_date)
        self.assertEqual(doc.profile.name, "Mina")

    def test_blank_medication_start_clears(self) -> None:
        doc = update_profile(AppDocument(), {"medication_start_date": "2024-01-01"})
        doc = update_profile(doc, ProfilePatch.model_validate({"medication_start_date": ""}))
        self.assertIsNone(doc.profile.medication_start_date)

    def test_impossible_dates_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ProfilePatch.model_validate({"medication_start_date": "2023-02-29"})
        with self.assertRaises(ValidationError):
            ProfilePatch.model_validate({"birth_date": "1990-13-01"})


if __name__ == "__main__":
    unittest.main()
