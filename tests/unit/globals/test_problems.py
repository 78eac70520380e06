from flughafen.globals.problems import Problem, ProblemLevel, Problems


def problem(location, level):
    return Problem(location, level, f"{level.name} at {location}", "test")


class TestProblems:
    def test_append_tracks_statistics(self):
        problems = Problems()

        problems.append(problem("a", ProblemLevel.WAR))
        problems.append(problem("b", ProblemLevel.NON))

        assert problems.max_level == ProblemLevel.WAR
        assert problems.n_warning == 1
        assert problems.n_error == 0

        problems.append(problem("c", ProblemLevel.ERR))

        assert problems.max_level == ProblemLevel.ERR
        assert problems.n_error == 1

    def test_sort_by_location_then_severity(self):
        problems = Problems()
        problems.extend(
            [
                problem("jobs.b", ProblemLevel.WAR),
                problem("jobs.a", ProblemLevel.WAR),
                problem("jobs.b", ProblemLevel.ERR),
                problem("", ProblemLevel.ERR),
            ]
        )

        problems.sort()

        assert [(p.location, p.level) for p in problems.problems] == [
            ("", ProblemLevel.ERR),
            ("jobs.a", ProblemLevel.WAR),
            ("jobs.b", ProblemLevel.ERR),
            ("jobs.b", ProblemLevel.WAR),
        ]

    def test_without_warnings(self):
        problems = Problems()
        problems.extend([problem("a", ProblemLevel.WAR), problem("b", ProblemLevel.NON)])

        filtered = problems.without_warnings()

        assert [p.location for p in filtered.problems] == ["b"]
        assert filtered.max_level == ProblemLevel.NON
        assert filtered.n_warning == 0
        assert len(problems.problems) == 2
