import unittest
from oprf.errors import DivisionByZero, InvalidElement, InvalidScalar, MalformedEncoding
from oprf.ristretto255 import GENERATOR, IDENTITY, ONE, ORDER, ZERO, deserialize_element, deserialize_scalar, \
    element_add, element_equal, is_identity, random_scalar, scalar_add, scalar_from_int, scalar_invert, \
    scalar_mul, scalar_mult, scalar_mult_base, scalar_negate, scalar_reduce, scalar_sub, scalar_to_int, \
    serialize_element, serialize_scalar

# https://www.rfc-editor.org/rfc/rfc9496#appendix-A.1
base_point = 'e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76'
two_base_point = '6a493210f7499cd17fecb510ae0cea23a110e8d5b901f8acadd3095c73a3b919'


class TestScalars(unittest.TestCase):
    def test_arithmetic(self):
        a = random_scalar()
        b = random_scalar()
        self.assertEqual(scalar_to_int(scalar_add(a, b)), (scalar_to_int(a) + scalar_to_int(b)) % ORDER)
        self.assertEqual(scalar_to_int(scalar_mul(a, b)), (scalar_to_int(a) * scalar_to_int(b)) % ORDER)
        self.assertEqual(scalar_sub(scalar_add(a, b), b), a)
        self.assertEqual(scalar_add(a, scalar_negate(a)), ZERO)

    def test_invert(self):
        a = random_scalar()
        self.assertEqual(scalar_mul(a, scalar_invert(a)), ONE)

    def test_invert_zero(self):
        with self.assertRaises(DivisionByZero):
            scalar_invert(ZERO)

    def test_reduce(self):
        self.assertEqual(scalar_reduce(ORDER.to_bytes(64, 'little')), ZERO)
        self.assertEqual(scalar_reduce((ORDER + 5).to_bytes(64, 'little')), scalar_from_int(5))
        with self.assertRaises(ValueError):
            scalar_reduce(bytes(32))

    def test_random_scalar_nonzero(self):
        rng_calls = []

        def rng(n):
            rng_calls.append(n)
            return ORDER.to_bytes(n, 'little') if len(rng_calls) == 1 else ONE + bytes(n - 32)

        # first draw reduces to zero and is discarded
        self.assertEqual(random_scalar(rng), ONE)
        self.assertEqual(rng_calls, [64, 64])

    def test_serialization(self):
        for _ in range(8):
            a = random_scalar()
            self.assertEqual(deserialize_scalar(serialize_scalar(a)), a)
        self.assertEqual(deserialize_scalar(ZERO), ZERO)
        self.assertEqual(deserialize_scalar(scalar_from_int(ORDER - 1)), scalar_from_int(ORDER - 1))

    def test_non_canonical(self):
        with self.assertRaises(InvalidScalar):
            deserialize_scalar(ORDER.to_bytes(32, 'little'))
        with self.assertRaises(InvalidScalar):
            deserialize_scalar(b'\xff' * 32)

    def test_wrong_length(self):
        for length in (0, 1, 31, 33, 64):
            with self.assertRaises(MalformedEncoding):
                deserialize_scalar(bytes(length))


class TestElements(unittest.TestCase):
    def test_generator(self):
        self.assertEqual(GENERATOR, bytes.fromhex(base_point))
        self.assertEqual(scalar_mult_base(scalar_from_int(2)), bytes.fromhex(two_base_point))
        self.assertEqual(element_add(GENERATOR, GENERATOR), bytes.fromhex(two_base_point))

    def test_distributive(self):
        a = random_scalar()
        b = random_scalar()
        lhs = scalar_mult_base(scalar_add(a, b))
        rhs = element_add(scalar_mult_base(a), scalar_mult(b, GENERATOR))
        self.assertTrue(element_equal(lhs, rhs))

    def test_serialization(self):
        for _ in range(8):
            p = scalar_mult_base(random_scalar())
            self.assertEqual(deserialize_element(serialize_element(p)), p)

    def test_identity_rejected(self):
        self.assertTrue(is_identity(IDENTITY))
        self.assertFalse(is_identity(GENERATOR))
        with self.assertRaises(InvalidElement):
            deserialize_element(IDENTITY)

    def test_zero_scalar_product_rejected(self):
        with self.assertRaises(InvalidElement):
            scalar_mult(ZERO, GENERATOR)
        with self.assertRaises(InvalidElement):
            scalar_mult_base(ZERO)

    def test_invalid_encodings(self):
        # negative field element, non-canonical field element
        for data in (b'\x01' + bytes(31), b'\xff' * 32, bytes(31) + b'\x80'):
            with self.assertRaises(InvalidElement):
                deserialize_element(data)

    def test_wrong_length(self):
        for length in (0, 31, 33, 96):
            with self.assertRaises(MalformedEncoding):
                deserialize_element(bytes(length))


if __name__ == '__main__':
    unittest.main()
