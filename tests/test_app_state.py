import unittest

from cgpacalc.core.grades import DEFAULT_GRADE_TABLE
from cgpacalc.state.app_state import AppState


class AppStateTests(unittest.TestCase):
    def setUp(self):
        self.state = AppState()
        self.summaries = []
        self.state.subscribe(self.summaries.append)

    def _first_ids(self):
        semester = self.state.semesters[0]
        return semester.id, semester.subjects[0].id

    def test_initial_state(self):
        self.assertEqual(len(self.state.semesters), 1)
        self.assertEqual(self.state.semesters[0].title, "Semester 1")
        self.assertEqual(len(self.state.semesters[0].subjects), 1)
        self.assertFalse(self.state.include_percentage)
        self.assertEqual(self.state.grade_table["A+"], 10.0)

        summary = self.state.calculate()
        self.assertEqual(summary.cgpa, 0.0)
        self.assertEqual(summary.semester_results[0].error, "Invalid Credits")
        self.assertIsNone(summary.percentage)

    def test_editing_a_row_recalculates(self):
        sem_id, subject_id = self._first_ids()
        self.state.update_subject(sem_id, subject_id, grade="A")
        self.state.update_subject(sem_id, subject_id, credits="4")

        self.assertEqual(len(self.summaries), 2)
        self.assertEqual(self.summaries[0].semester_results[0].error, "Invalid Credits")
        self.assertAlmostEqual(self.summaries[-1].cgpa, 9.0)
        self.assertEqual(self.state.semesters[0].subjects[0].id, subject_id)

    def test_add_semester_titles(self):
        second = self.state.add_semester()
        third = self.state.add_semester()
        self.assertEqual(second.title, "Semester 2")
        self.assertEqual(third.title, "Semester 3")
        self.assertEqual(len(self.summaries[-1].semester_results), 3)

    def test_last_semester_cannot_be_removed(self):
        sem_id, _ = self._first_ids()
        self.state.remove_semester(sem_id)
        self.assertEqual(len(self.state.semesters), 1)
        self.assertEqual(self.summaries, [])

        second = self.state.add_semester()
        self.state.remove_semester(sem_id)
        self.assertEqual([s.id for s in self.state.semesters], [second.id])

    def test_rename_semester(self):
        sem_id, _ = self._first_ids()
        self.state.rename_semester(sem_id, "Odd Term")
        self.assertEqual(self.state.semesters[0].title, "Odd Term")

    def test_subject_rows(self):
        sem_id, subject_id = self._first_ids()
        self.state.remove_subject(sem_id, subject_id)
        self.assertEqual(len(self.state.semesters[0].subjects), 1)

        self.state.add_subject(sem_id)
        self.assertEqual(len(self.state.semesters[0].subjects), 2)
        self.state.remove_subject(sem_id, subject_id)
        self.assertEqual(len(self.state.semesters[0].subjects), 1)
        self.assertNotEqual(self.state.semesters[0].subjects[0].id, subject_id)

    def test_unknown_ids_raise(self):
        with self.assertRaises(KeyError):
            self.state.rename_semester("missing", "x")
        sem_id, _ = self._first_ids()
        with self.assertRaises(KeyError):
            self.state.update_subject(sem_id, "missing", grade="A")

    def test_errored_semester_does_not_block_others(self):
        sem_id, subject_id = self._first_ids()
        self.state.update_subject(sem_id, subject_id, grade="A", credits="10")
        second = self.state.add_semester()
        self.state.update_subject(second.id, second.subjects[0].id, grade="Z", credits="3")

        summary = self.summaries[-1]
        self.assertAlmostEqual(summary.cgpa, 9.0)
        self.assertEqual(len(summary.semester_results), 2)
        self.assertEqual(summary.semester_results[1].error, "Unknown Grade: 'Z'")

    def test_grade_table_edits_recalculate(self):
        sem_id, subject_id = self._first_ids()
        self.state.update_subject(sem_id, subject_id, grade="b", credits="3")
        self.assertAlmostEqual(self.summaries[-1].cgpa, 7.0)

        self.state.update_grade_points("B", "7.5")
        self.assertAlmostEqual(self.summaries[-1].cgpa, 7.5)

        self.state.update_grade_points("B", "oops")
        self.assertEqual(self.state.grade_table["B"], 7.5)

        self.state.rename_grade("B", "X")
        self.assertEqual(self.summaries[-1].semester_results[0].error, "Unknown Grade: 'b'")

    def test_add_and_remove_grade(self):
        self.state.add_grade()
        self.assertIn("NEW", self.state.grade_table)
        self.state.remove_grade("NEW")
        self.assertNotIn("NEW", self.state.grade_table)

    def test_removing_unknown_grade_is_ignored(self):
        self.state.remove_grade("ZZ")
        self.assertEqual(self.state.grade_table, DEFAULT_GRADE_TABLE)
        self.assertEqual(self.summaries, [])

    def test_last_grade_mapping_is_kept(self):
        self.state.grade_table = {"A": 9.0}
        self.state.remove_grade("A")
        self.assertEqual(self.state.grade_table, {"A": 9.0})

    def test_percentage_toggle(self):
        sem_id, subject_id = self._first_ids()
        self.state.update_subject(sem_id, subject_id, grade="A+", credits="4")
        self.state.set_include_percentage(True)
        self.assertAlmostEqual(self.summaries[-1].percentage, 92.5)
        self.state.set_include_percentage(False)
        self.assertIsNone(self.summaries[-1].percentage)

    def test_unsubscribe(self):
        other = []
        unsubscribe = self.state.subscribe(other.append)
        self.state.add_semester()
        unsubscribe()
        self.state.add_semester()
        self.assertEqual(len(other), 1)
        self.assertEqual(len(self.summaries), 2)


if __name__ == "__main__":
    unittest.main()
