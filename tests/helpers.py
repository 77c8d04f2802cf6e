from evalwatch.core.info import Info, OptimizationType, ProblemMeta


def make_info(n, y, best=None):
    best = y if best is None else best
    return Info(
        evaluation_count=n,
        raw_y=float(y),
        transformed_y=float(y),
        raw_y_best=float(best),
        transformed_y_best=float(best),
    )


def run_stream(ys, start=1, direction=OptimizationType.MIN):
    """Info stream with best-so-far tracking, evaluation counts start..start+len-1."""
    out = []
    best = None
    for i, y in enumerate(ys):
        if best is None or direction.is_better(y, best):
            best = y
        out.append(make_info(start + i, y, best))
    return out


PROBLEM = ProblemMeta(problem_id=1, name="Sphere", dimension=2, instance=1)
