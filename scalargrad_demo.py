"""
Build a small expression, backpropagate through it and draw the graph.
"""

import argparse

from scalargrad import Value
from scalargrad_viz import draw_dot


def build_demo():
    """i = (a*b + c) * f - h, every node labelled."""
    a = Value(-4.0, label='a')
    b = Value(2.0, label='b')
    c = Value(10.0, label='c')
    e = a * b; e.label = 'e'
    d = e + c; d.label = 'd'
    f = Value(-2.0, label='f')
    g = d * f; g.label = 'g'
    h = Value(5.0, label='h')
    i = g - h; i.label = 'i'
    return i, [a, b, c, d, e, f, g, h, i]


def build_karpathy():
    """The longer expression from the micrograd README."""
    a = Value(-4.0, label='a')
    b = Value(2.0, label='b')
    c = a + b
    d = a * b + b**3
    c += c + 1
    c += 1 + c + (-a)
    d += d * 2 + (b + a).relu()
    d += 3 * d + (b - a).relu()
    e = c - d
    f = e**2
    g = f / 2.0
    g += 10.0 / f
    g.label = 'g'
    return g, [a, b, g]


EXPRESSIONS = {
    'demo': build_demo,
    'karpathy': build_karpathy,
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Backpropagate through a scalar expression and draw its graph',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--expression', choices=sorted(EXPRESSIONS), default='demo',
                        help='which example expression to build')
    parser.add_argument('--out', type=str, default='graph',
                        help='output file stem for the rendered graph')
    parser.add_argument('--format', type=str, default='svg',
                        help='graphviz output format (svg, png, pdf, ...)')
    parser.add_argument('--no-render', action='store_true',
                        help='skip rendering the graph')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    root, named = EXPRESSIONS[args.expression]()
    root.backward()

    print(f"Forward pass: {root.label} = {root.data:.4f}")
    for v in named:
        print(f"{v.label}: data={v.data:.4f}, grad={v.grad:.4f}")

    if args.no_render:
        return 0

    dot = draw_dot(root, format=args.format)
    try:
        path = dot.render(args.out, cleanup=True)
        print(f"Graph rendered to '{path}'")
    except Exception as e:
        print(f"\nCould not render graph locally: {e}")
        print("Copy the source below and paste into https://dreampuf.github.io/GraphvizOnline/")
        print("-" * 20)
        print(dot.source)
        print("-" * 20)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
