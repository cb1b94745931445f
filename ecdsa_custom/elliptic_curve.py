from dataclasses import dataclass


@dataclass(frozen=True)
class NormalPoint:
    x: int
    y: int


@dataclass(frozen=True)
class PointAtInfinity:
    pass


Point = NormalPoint | PointAtInfinity


class EllipticCurve:
    # y^2 = x^3 + ax + b (mod p)
    name: str
    a: int
    b: int
    p: int

    G: NormalPoint
    n: int

    # Constructor does not check if p is indeed prime
    def __init__(self, name: str, a: int, b: int, p: int, G: NormalPoint, n: int):  # noqa: N803
        self.name = name
        self.a = a % p
        self.b = b
        self.p = p
        self.G = G
        self.n = n

    @property
    def order_length(self) -> int:
        # bytes needed for a scalar modulo n
        return (self.n.bit_length() + 7) // 8

    def is_valid(self, p: Point) -> bool:
        if isinstance(p, PointAtInfinity):
            return True

        if not (0 <= p.x < self.p and 0 <= p.y < self.p):
            return False

        return (p.x**3 + self.a * p.x + self.b - p.y**2) % self.p == 0

    # https://en.wikipedia.org/wiki/Elliptic_curve_point_multiplication
    def add(self, p: Point, q: Point) -> Point:
        if isinstance(p, PointAtInfinity):
            return q
        if isinstance(q, PointAtInfinity):
            return p

        # also covers doubling a point with y = 0
        if p.x == q.x and (p.y + q.y) % self.p == 0:
            return PointAtInfinity()

        def get_lambda() -> int:
            if p.x != q.x:
                return (q.y - p.y) * pow(q.x - p.x, -1, self.p) % self.p
            return (3 * p.x**2 + self.a) * pow(2 * p.y, -1, self.p) % self.p

        lam = get_lambda()
        r_x = (lam**2 - p.x - q.x) % self.p
        return NormalPoint(r_x, (lam * (p.x - r_x) - p.y) % self.p)

    def multiply(self, p: Point, k: int) -> Point:
        res: Point = PointAtInfinity()
        while k:
            if k & 1:
                res = self.add(res, p)

            p = self.add(p, p)
            k >>= 1
        return res


# https://neuromancer.sk/std/nist/P-256
# a = -3, stored reduced modulo p
p256 = EllipticCurve(
    'NIST256p',
    -3,
    0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    NormalPoint(
        0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296, 0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5
    ),
    0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
)

# names under which the curve is known to OpenSSL, WebCrypto and python-ecdsa
CURVES: dict[str, EllipticCurve] = {
    'NIST256p': p256,
    'prime256v1': p256,
    'secp256r1': p256,
    'P-256': p256,
}
