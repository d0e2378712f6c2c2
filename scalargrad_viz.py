"""
Graphviz rendering of a scalargrad computation graph.

Both functions only read ``data``, ``grad``, ``_op``, ``label`` and ``_prev``;
they never change a node.
"""

import re

from graphviz import Digraph

# characters with a meaning inside a graphviz record label
_RECORD_SPECIAL = re.compile(r"([{}|<>])")


def trace(root):
    """Collect every node reachable from ``root`` and the (child, parent) edges between them."""
    nodes, edges = set(), set()
    stack = [root]
    while stack:
        v = stack.pop()
        if v in nodes:
            continue
        nodes.add(v)
        for child in v._prev:
            edges.add((child, v))
            stack.append(child)
    return nodes, edges


def draw_dot(root, format='svg', rankdir='LR'):
    """
    Build a ``graphviz.Digraph`` of the graph ending at ``root``.

    Each value becomes a record node showing its data and gradient. A value
    produced by an operation also gets a small oval node for the operation,
    sitting between the inputs and the result.
    """
    if rankdir not in ('LR', 'TB'):
        raise ValueError(f"rankdir must be 'LR' or 'TB', got {rankdir!r}")
    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    nodes, edges = trace(root)
    # sort so the emitted source is stable across runs
    for n in sorted(nodes, key=id):
        uid = str(id(n))
        fields = "data %.4f | grad %.4f" % (n.data, n.grad)
        if n.label:
            fields = "%s | %s" % (_RECORD_SPECIAL.sub(r"\\\1", n.label), fields)
        dot.node(name=uid, label="{ %s }" % fields, shape='record')

        if n._op:
            dot.node(name=uid + n._op, label=n._op)
            dot.edge(uid + n._op, uid)

    for n1, n2 in sorted(edges, key=lambda e: (id(e[0]), id(e[1]))):
        dot.edge(str(id(n1)), str(id(n2)) + n2._op)

    return dot
