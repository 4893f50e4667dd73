import datetime as dt
import unittest

from calgrid.layout import week_layout
from calgrid.model import CalendarView, DisplayMode, DisplayPosition, GroupLayout, Viewport, Weekday
from calgrid.session import CalendarSession, iter_displayed_items
from calgrid.window import CalendarConfigError

from _fixtures import DAY, ap


def _view(**kw) -> CalendarView:
    base = dict(mode=DisplayMode.WEEK, anchor_date=DAY, first_day_of_week=Weekday.SUNDAY)
    base.update(kw)
    return CalendarView(**base)


class TestCalendarSessionContract(unittest.TestCase):
    def test_set_items_recomputes_whole_week(self) -> None:
        s = CalendarSession(_view())
        self.assertIsNone(s.current())

        week = s.set_items([ap(9, 0, 10, 0)])
        self.assertIsNotNone(week)
        self.assertIs(s.current(), week)
        self.assertEqual(len(week.days), 7)

    def test_session_without_anchor_has_no_layout(self) -> None:
        s = CalendarSession(CalendarView(mode=DisplayMode.WEEK))
        self.assertIsNone(s.set_items([ap(9, 0, 10, 0)]))

    def test_only_latest_recompute_publishes(self) -> None:
        s = CalendarSession(_view(), [ap(9, 0, 10, 0)])
        old = week_layout(s.items, s.view)
        new = week_layout(s.items, _view(mode=DisplayMode.WORK_WEEK))

        t1 = s.begin_recompute()
        t2 = s.begin_recompute()
        self.assertTrue(s.publish(t2, new))
        self.assertFalse(s.publish(t1, old))
        self.assertIs(s.current(), new)

    def test_day_count_below_one_is_ignored(self) -> None:
        s = CalendarSession(_view(mode=DisplayMode.DAY, day_count=3))
        before = s.recompute()
        self.assertIs(s.set_day_count(0), before)
        self.assertEqual(s.view.day_count, 3)

    def test_day_count_above_max_fails_without_changing_view(self) -> None:
        s = CalendarSession(_view(mode=DisplayMode.DAY, day_count=3))
        with self.assertRaises(CalendarConfigError):
            s.set_day_count(11)
        self.assertEqual(s.view.day_count, 3)

        s.set_mode(DisplayMode.WEEK)
        week = s.set_day_count(11)
        self.assertEqual(len(week.days), 7)

    def test_setters_and_step(self) -> None:
        s = CalendarSession(_view(mode=DisplayMode.DAY, day_count=3))
        s.set_alignment(DisplayPosition.RIGHT)
        self.assertEqual(s.current().window.first_visible_date, DAY - dt.timedelta(days=2))

        s.step(1)
        self.assertEqual(s.view.anchor_date, DAY + dt.timedelta(days=3))

        s.set_anchor_date(DAY)
        s.set_mode(DisplayMode.WEEK)
        s.set_first_day_of_week(Weekday.MONDAY)
        self.assertEqual(s.current().window.first_visible_date, dt.date(2026, 10, 12))

    def test_select_next_follows_display_order(self) -> None:
        items = [
            ap(14, 0, 15, 0),
            ap(9, 0, 10, 0),
            ap(9, 30, 10, 30, lane=1),
        ]
        s = CalendarSession(_view(), items)
        s.recompute()
        self.assertEqual(s.displayed_order(), [1, 2, 0])

        self.assertEqual(s.select_next(1), 1)
        self.assertEqual(s.select_next(1), 2)
        self.assertEqual(s.select_next(1), 0)
        self.assertEqual(s.select_next(1), 1)
        self.assertEqual(s.select_next(-1), 0)

    def test_iter_displayed_items_only_yields_content(self) -> None:
        items = [ap(9, 0, 10, 0), ap(11, 0, 12, 0, lane=1)]
        week = week_layout(items, _view())
        self.assertEqual(list(iter_displayed_items(week)), items)
        for day in week.days:
            for row in day.rows:
                if row.content is not None:
                    self.assertIsInstance(row.content, GroupLayout)

    def test_scroll_into_view_reanchors_session(self) -> None:
        far = ap(8, 0, 9, 0, day=dt.date(2026, 10, 27))
        s = CalendarSession(_view(), [far])
        s.recompute()
        vp = Viewport(0.0, 0.0, 700.0, 600.0, 700.0, 2400.0)

        res = s.scroll_into_view(0, vp)
        self.assertEqual(s.view.anchor_date, dt.date(2026, 10, 27))
        self.assertEqual(s.current().window.first_visible_date, dt.date(2026, 10, 25))
        self.assertIsNotNone(res.offset)
        self.assertIsNone(s.scroll_into_view(5, vp))


if __name__ == "__main__":
    unittest.main(verbosity=2)
