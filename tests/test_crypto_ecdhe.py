# Unit tests for crypto_ecdhe.py
# python -m unittest -v tests.test_crypto_ecdhe

import os
import sys
sys.path.insert(1, os.path.join(sys.path[0], '..'))

import random
import unittest
from cryptography.hazmat.primitives import serialization # pip install cryptography
from cryptography.hazmat.primitives.asymmetric.x25519 import \
    X25519PrivateKey, X25519PublicKey
from crypto_ecdhe import *
from crypto_x25519 import decodeLittleEndian

# Test Vectors
# https://tools.ietf.org/html/rfc7748#section-6.1

ALICE_SEC = bytes.fromhex(
    '77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a')
ALICE_PUB = bytes.fromhex(
    '8520f0098930a754748b7ddcb43ef75a0dbf3a0d26381af4eba4a98eaa9b4e6a')
BOB_SEC = bytes.fromhex(
    '5dab087e624a8a4b79e17f8b83800ee66f3bb1292618b6fd1c2f8b27ff88e0eb')
BOB_PUB = bytes.fromhex(
    'de9edb7d7b7dc1b4d35b61c2ece435373f8343c85b78674dadfc7e146f882b4f')
SHARED = bytes.fromhex(
    '4a5d9d5ba4ce2de1728e3bf480350f25e07e21c947d19e3376f09b3c1e161742')

def seeded_random_bytes(seed):
    rng = random.Random(seed)
    return lambda n: bytes(rng.getrandbits(8) for _ in range(n))

def oracle_public_key(secret: bytes) -> bytes:
    return X25519PrivateKey.from_private_bytes(secret).public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw)

def oracle_shared_secret(peer_public: bytes, secret: bytes) -> bytes:
    return X25519PrivateKey.from_private_bytes(secret).exchange(
        X25519PublicKey.from_public_bytes(peer_public))

class TestUnit(unittest.TestCase):

    def test_rfc7748_public_keys(self):
        self.assertEqual(public_key(ALICE_SEC), ALICE_PUB)
        self.assertEqual(public_key(BOB_SEC), BOB_PUB)

    def test_rfc7748_shared_secret(self):
        self.assertEqual(shared_secret(BOB_PUB, ALICE_SEC), SHARED)
        self.assertEqual(shared_secret(ALICE_PUB, BOB_SEC), SHARED)
        self.assertEqual(shared_secret(ALICE_PUB, BOB_SEC, validate=True), SHARED)

    def test_integer_inputs(self):
        self.assertEqual(public_key(decodeLittleEndian(ALICE_SEC)), ALICE_PUB)
        self.assertEqual(
            shared_secret(decodeLittleEndian(BOB_PUB), decodeLittleEndian(ALICE_SEC)),
            SHARED)

    def test_random_secret_injected(self):
        calls = []
        def random_bytes(n):
            calls.append(n)
            return b'\xff' * n
        sec = random_secret(random_bytes)
        self.assertEqual(calls, [32])
        self.assertEqual(sec, b'\xf8' + b'\xff' * 30 + b'\x7f')

    def test_random_secret_default(self):
        sec = random_secret()
        self.assertEqual(len(sec), 32)
        self.assertEqual(clamp(sec), sec)
        self.assertNotEqual(random_secret(), sec)

    def test_random_secret_short_source(self):
        with self.assertRaises(ValueError):
            random_secret(lambda n: bytes(n - 1))

    def test_commutativity(self):
        random_bytes = seeded_random_bytes(0)
        for _ in range(3):
            a = random_secret(random_bytes)
            b = random_secret(random_bytes)
            self.assertEqual(shared_secret(public_key(a), b),
                             shared_secret(public_key(b), a))

    def test_keypair(self):
        alice = KeyPair.from_secret(ALICE_SEC)
        self.assertEqual(alice.public, ALICE_PUB)
        self.assertEqual(alice.secret, clamp(ALICE_SEC))
        self.assertEqual(alice.exchange(BOB_PUB), SHARED)
        self.assertNotIn(alice.secret.hex(), repr(alice))
        with self.assertRaises(AttributeError):
            alice.secret = bytes(32)

    def test_keypair_generate(self):
        random_bytes = seeded_random_bytes(1)
        alice = KeyPair.generate(random_bytes)
        bob = KeyPair.generate(random_bytes)
        self.assertNotEqual(alice.public, bob.public)
        self.assertEqual(alice.exchange(bob.public), bob.exchange(alice.public))
        self.assertTrue(is_valid_public_key(alice.public))

    def test_validate_twist_point(self):
        # Half of all u-coordinates belong to the quadratic twist.
        u = 2
        while is_valid_public_key(u):
            u += 1
        with self.assertRaises(InvalidPublicKey):
            shared_secret(u, ALICE_SEC, validate=True)
        self.assertEqual(len(shared_secret(u, ALICE_SEC)), 32)

    def test_validate_small_order(self):
        self.assertEqual(shared_secret(bytes(32), ALICE_SEC), bytes(32))
        with self.assertRaises(InvalidPublicKey):
            shared_secret(bytes(32), ALICE_SEC, validate=True)
        self.assertTrue(issubclass(InvalidPublicKey, ValueError))

    def test_bad_lengths(self):
        with self.assertRaises(ValueError):
            public_key(bytes(16))
        with self.assertRaises(ValueError):
            shared_secret(bytes(31), ALICE_SEC)

    def test_matches_cryptography(self):
        random_bytes = seeded_random_bytes(2)
        for _ in range(3):
            a = random_bytes(32)
            b = random_bytes(32)
            self.assertEqual(public_key(a), oracle_public_key(a))
            self.assertEqual(shared_secret(oracle_public_key(b), a),
                             oracle_shared_secret(public_key(a), b))


if __name__ == '__main__':
    unittest.main()
