"""
Scalar reverse-mode autograd.

A `Value` wraps one real number. Arithmetic on values builds a computation
graph, and `backward()` walks that graph in reverse topological order to fill
in `grad` on every node with d(root)/d(node).
"""

import math
from numbers import Real

__all__ = ["Value", "InvalidOperandError", "OperandTypeError"]


class InvalidOperandError(TypeError):
    """Raised when a power exponent is not a real number, or is fractional on a negative base."""


class OperandTypeError(TypeError):
    """Raised when an operand is neither a Value nor a real number."""


def _is_real(x) -> bool:
    return isinstance(x, Real)


def _power_slope(x, k):
    """d/dx of x ** k, including a zero base where x ** (k - 1) is undefined."""
    if x == 0:
        if k == 1:
            return 1.0
        if 0 < k < 1:
            return math.inf
        # k == 0 or k > 1; k < 0 already failed in the forward pass
        return 0.0
    return k * x ** (k - 1)


# --- The Autograd Engine (Scalar) ---
class Value:
    def __init__(self, data: float, _children: tuple = (), _op: str = '', label: str = ''):
        if not _is_real(data):
            raise OperandTypeError(f"Value expects a real number, got {type(data).__name__}")
        self.data = data
        self.grad = 0.0
        self._prev = tuple(_children)
        self._op = _op
        self.label = label
        self._backward = lambda: None

    def __repr__(self):
        return f"Value(data={self.data:.4f}, grad={self.grad:.4f})"

    @staticmethod
    def _wrap(other):
        if isinstance(other, Value):
            return other
        if _is_real(other):
            return Value(other)
        raise OperandTypeError(f"unsupported operand type: {type(other).__name__}")

    def add(self, other):
        other = self._wrap(other)
        out = Value(self.data + other.data, _children=(self, other), _op='+')

        def _backward():
            self.grad += 1.0 * out.grad
            other.grad += 1.0 * out.grad
        out._backward = _backward
        return out

    def multiply(self, other):
        other = self._wrap(other)
        out = Value(self.data * other.data, _children=(self, other), _op='*')

        def _backward():
            self.grad += other.data * out.grad
            other.grad += self.data * out.grad
        out._backward = _backward
        return out

    def power(self, k):
        if not _is_real(k):
            raise InvalidOperandError(
                f"exponent must be a real number, got {type(k).__name__}")
        if self.data < 0 and not float(k).is_integer():
            raise InvalidOperandError(
                f"negative base {self.data} with fractional exponent {k} has no real result")
        out = Value(self.data ** k, _children=(self,), _op=f'**{k}')

        def _backward():
            self.grad += _power_slope(self.data, k) * out.grad
        out._backward = _backward
        return out

    def negate(self):
        return self.multiply(-1)

    def subtract(self, other):
        return self.add(self._wrap(other).negate())

    def divide(self, other):
        return self.multiply(self._wrap(other).power(-1))

    def __add__(self, other):
        return self.add(other)

    def __mul__(self, other):
        return self.multiply(other)

    def __pow__(self, other):
        return self.power(other)

    # Reflected and derived operators
    def __radd__(self, other): return self._wrap(other).add(self)
    def __rmul__(self, other): return self._wrap(other).multiply(self)
    def __neg__(self): return self.negate()
    def __sub__(self, other): return self.subtract(other)
    def __rsub__(self, other): return self._wrap(other).subtract(self)
    def __truediv__(self, other): return self.divide(other)
    def __rtruediv__(self, other): return self._wrap(other).divide(self)

    def relu(self):
        out = Value(self.data if self.data > 0 else 0.0, _children=(self,), _op='ReLU')

        def _backward():
            self.grad += (1.0 if self.data > 0 else 0.0) * out.grad
        out._backward = _backward
        return out

    def tanh(self):
        out = Value(math.tanh(self.data), _children=(self,), _op='tanh')

        def _backward():
            self.grad += (1 - out.data**2) * out.grad
        out._backward = _backward
        return out

    def exp(self):
        out = Value(math.exp(self.data), _children=(self,), _op='exp')

        def _backward():
            self.grad += out.data * out.grad
        out._backward = _backward
        return out

    def _topo(self):
        """Post-order over everything reachable from self: predecessors first."""
        topo = []
        visited = set()
        # explicit stack so long chains don't hit the recursion limit
        stack = [(self, False)]
        while stack:
            v, expanded = stack.pop()
            if expanded:
                topo.append(v)
                continue
            if v in visited:
                continue
            visited.add(v)
            stack.append((v, True))
            for child in reversed(v._prev):
                if child not in visited:
                    stack.append((child, False))
        return topo

    def backward(self):
        """
        Fill in ``grad`` on every node reachable from this one.

        Gradients are accumulated, not overwritten, and the root itself is
        always reset to 1.0. A second call without ``zero_grad`` is not a plain
        doubling: intermediate nodes keep their old ``grad``, add the new
        contribution on top and push the larger total on to their inputs, so
        the error compounds with depth.
        """
        topo = self._topo()
        self.grad = 1.0
        for node in reversed(topo):
            node._backward()

    def zero_grad(self):
        for node in self._topo():
            node.grad = 0.0

    def draw_dot(self, **kwargs):
        from scalargrad_viz import draw_dot
        return draw_dot(self, **kwargs)
