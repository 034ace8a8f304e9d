"""
Simple QuantumWalk example: list the first steps of the chain, then match a
short interval sequence against it and print a report.
"""
from quantumwalk.core import (
    StepGenerator, StepCache, SequenceMatcher, MatchRequest,
    parse_interval_string, format_duration,
)
from quantumwalk.reporting import format_steps_table, format_text_report


def main() -> None:
    gen = StepGenerator(cache=StepCache())
    origin = gen.initial_step()
    steps = [origin] + gen.steps_forward(origin, 9)
    print(format_steps_table(steps))
    print("Mean interval:", format_duration(sum(s.interval for s in steps[1:]) // 9))

    user = parse_interval_string("3d 14h 23m, 2.5d, 48h, 6d 2h")
    res = SequenceMatcher(gen, default_window=2000).match(MatchRequest(values=user))
    print(format_text_report(res, title="QuantumWalk Simple Example"))


if __name__ == "__main__":
    main()
