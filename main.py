import argparse
import logging
import random

from Crypto.Hash import SHA256

from curve import Curve, DomainParameters, KeyAgreementError, SigningError

# === Helper Functions ===
def hash_message(message: str, n: int) -> int:
    """SHA-256 of the message as an integer reduced mod the group order."""
    message_digest = SHA256.new(data=message.encode("utf-8"))
    return int(message_digest.hexdigest(), 16) % n

# === Main Demo ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Elliptic Curve ECDSA and Diffie-Hellman Demo")
    parser.add_argument("-c", "--curve", default="secp256k1", choices=DomainParameters.supported_curves(), help="Named curve to use (default: secp256k1)")
    parser.add_argument("-m", "--message", default="Hello ECDSA", help="Message to sign (default: 'Hello ECDSA')")
    parser.add_argument("-s", "--seed", type=int, default=None, help="Seed a deterministic generator instead of the system CSPRNG (testing only)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log signing retries")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    params = DomainParameters.from_name(args.curve)
    rng = random.Random(args.seed) if args.seed is not None else None
    curve = Curve(params, rng=rng)

    print(f"=== {params.name} ECDSA / Diffie-Hellman Demo ===")

    # Generate keypair
    sk, pk = curve.generate_keypair()
    print(f"Private key (d): {sk.num}")
    print(f"Public key (Q): {pk}\n")

    # Sign a message
    z = hash_message(args.message, params.n)
    print(f"Message: {args.message}")
    print(f"Message scalar (z): {z}")
    try:
        signature = curve.sign(sk, z)
    except SigningError as e:
        print(e.message)
        return 1
    print(f"Signature: {signature}")

    # Verify signature
    valid = curve.verify(pk, z, signature)
    print(f"Signature valid? {valid}\n")

    # Key agreement with a second party
    sk2, pk2 = curve.generate_keypair()
    try:
        shared = curve.diffie_hellman(sk, pk2)
        shared2 = curve.diffie_hellman(sk2, pk)
    except KeyAgreementError as e:
        print(e.message)
        return 1
    print(f"DH secret (ours): {shared.num}")
    print(f"DH secret (theirs): {shared2.num}")
    print(f"DH secrets match? {shared == shared2}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
