"""RSA primitives: key classes, RSAES-OAEP, RSASSA-PKCS1-v1_5 and DER key serialization.

Implements the relevant parts of RFC 8017 on plain Python integers. Public keys serialize to DER
SubjectPublicKeyInfo (RFC 5280) and private keys to DER PKCS#8 PrivateKeyInfo (RFC 5208), both with the
`rsaEncryption` algorithm identifier, which is what WebCrypto `spki`/`pkcs8` exports and OpenSSL produce.

Typical usage example:

    pk = RSAPrivKey.generate(2048)
    c = pk.pub.enc_oaep(b"Hi there!", hashf="sha256")
    r = pk.dec_oaep(c, hashf="sha256")
    s = pk.sign_pkcs1v15(b"Hi there!")
    pk.pub.verify_pkcs1v15(b"Hi there!", s)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
import hmac
from math import ceil
from secrets import token_bytes

from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import univ
from pyasn1_modules import rfc5208
from pyasn1_modules import rfc5280
from pyasn1_modules import rfc8017

from didcrypt import keygen

HASH_TLL = {
    "sha256": (hashlib.sha256, rfc8017.id_sha256, 32, 2**61 - 1),
    "sha384": (hashlib.sha384, rfc8017.id_sha384, 48, 2**125 - 1),
    "sha512": (hashlib.sha512, rfc8017.id_sha512, 64, 2**125 - 1),
}


class RSAKey:
    """Shared core of public and private RSA keys.

    Attributes:
        mod: The modulus of the key pair.
        expo: The exponent of this key, public or private.
        bsize: Length of the modulus in bytes (`k` in RFC 8017).
    """

    def __init__(self, mod: int, expo: int) -> None:
        self.mod = mod
        self.expo = expo
        self.bsize = (self.mod.bit_length() + 7) // 8

    def c_rsa(self, message: int) -> int:
        """Core RSA transform (RSAEP / RSAVP1 for public keys).

        Args:
            message: The integer representative.

        Returns:
            `message ** expo mod mod`.

        Raises:
            ValueError: If the representative is out of range for the key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return pow(message, self.expo, self.mod)


class RSAPubKey(RSAKey):
    """Public half of an RSA key pair: encryption and signature verification."""

    def max_oaep_payload(self, hashf: str = "sha256") -> int:
        """Largest message `enc_oaep` accepts for this key and hash: `k - 2 * hLen - 2`."""
        return self.bsize - 2 * (HASH_TLL[hashf][2] + 1)

    def enc_oaep(self,
                 message: bytes,
                 label: bytes = b"",
                 hashf: str = "sha256",
                 seed: bytes | None = None) -> bytes:
        """RSAES-OAEP-ENCRYPT (RFC 8017 7.1.1), with MGF1 over the same hash.

        Args:
            message: Message to encrypt.
            label: Optional label bound to the ciphertext.
            hashf: Hash function (sha256, sha384 or sha512).
            seed: The `hLen` random seed bytes. Drawn from `secrets` when omitted.

        Returns:
            The ciphertext, exactly `bsize` bytes long.

        Raises:
            ValueError: If label or message is too long for the key and hash function, or the seed has the wrong
                length.
        """
        fun, _, hlen, hcap = HASH_TLL[hashf]
        if len(label) > hcap:
            raise ValueError("Label too long for the specified hash function")
        if len(message) > self.max_oaep_payload(hashf):
            raise ValueError("Message too long for the specified hash function")
        if seed is None:
            seed = token_bytes(hlen)
        if len(seed) != hlen:
            raise ValueError("Seed length must match the hash length")
        lh = fun(label).digest()
        ps = b"\x00" * (self.bsize - len(message) - 2 * (hlen + 1))
        db = lh + ps + b"\x01" + message
        mdb = xorbytes(db, mgf1(seed, self.bsize - hlen - 1, hashf))
        mseed = xorbytes(seed, mgf1(mdb, hlen, hashf))
        em = bytes_to_integer(b"\x00" + mseed + mdb)
        return integer_to_bytes(self.c_rsa(em), self.bsize)

    def verify_pkcs1v15(self, message: bytes, signature: bytes, hashf: str = "sha256") -> bool:
        """RSASSA-PKCS1-V1_5-VERIFY (RFC 8017 8.2.2).

        Rebuilds the expected encoded message and compares it with the recovered one, rather than parsing the
        recovered DigestInfo.

        Args:
            message: The signed message.
            signature: The signature bytes.
            hashf: Hash function (sha256, sha384 or sha512).

        Returns:
            True only for a valid signature. Wrong length or out-of-range signatures are simply invalid.
        """
        if len(signature) != self.bsize:
            return False
        try:
            recovered = integer_to_bytes(self.c_rsa(bytes_to_integer(signature)), self.bsize)
            expected = emsa_pkcs1v15_encode(message, self.bsize, hashf)
        except ValueError:
            return False
        return hmac.compare_digest(recovered, expected)

    def export_der(self) -> bytes:
        """Serializes the key as DER SubjectPublicKeyInfo with the `rsaEncryption` identifier."""
        keydata = rfc8017.RSAPublicKey()
        keydata["modulus"] = self.mod
        keydata["publicExponent"] = self.expo
        algo = rfc5280.AlgorithmIdentifier()
        algo["algorithm"] = rfc8017.rsaEncryption
        algo["parameters"] = univ.Null("")
        spki = rfc5280.SubjectPublicKeyInfo()
        spki["algorithm"] = algo
        spki["subjectPublicKey"] = univ.BitString.fromOctetString(encoder.encode(keydata))
        return encoder.encode(spki)

    @classmethod
    def import_der(cls, data: bytes) -> "RSAPubKey":
        """Parses DER SubjectPublicKeyInfo.

        Args:
            data: The DER bytes.

        Returns:
            The public key.

        Raises:
            IOError: If the structure is not an RSA SubjectPublicKeyInfo.
            pyasn1.error.PyAsn1Error: If the DER itself is broken.
        """
        if not data:
            raise IOError("Empty public key structure.")
        spki, rest = decoder.decode(data, asn1Spec=rfc5280.SubjectPublicKeyInfo())
        if rest:
            raise IOError("Trailing data after public key structure.")
        if spki["algorithm"]["algorithm"] != rfc8017.rsaEncryption:
            raise IOError("Public Key Algorithm not supported.")
        keydata, rest = decoder.decode(spki["subjectPublicKey"].asOctets(), asn1Spec=rfc8017.RSAPublicKey())
        if rest:
            raise IOError("Trailing data after RSA public key.")
        pykeyd = localize.encode(keydata)
        _check_numbers(pykeyd["modulus"], pykeyd["publicExponent"])
        return cls(pykeyd["modulus"], pykeyd["publicExponent"])

    def __eq__(self, other) -> bool:
        if not isinstance(other, RSAPubKey):
            return NotImplemented
        return (self.mod, self.expo) == (other.mod, other.expo)

    def __hash__(self) -> int:
        return hash((self.mod, self.expo))


class RSAPrivKey(RSAKey):
    """Private half of an RSA key pair: decryption and signing.

    Keeps the CRT components when available, which both speeds up the transform and is required for PKCS#8
    export.

    Attributes:
        mod: The modulus of the key pair.
        expo: The private exponent.
        pub: The matching public key.
        p: Private prime 1.
        q: Private prime 2.
    """

    def __init__(self,
                 mod: int,
                 pub_exp: int,
                 priv_exp: int,
                 p: int | None = None,
                 q: int | None = None,
                 exp1: int | None = None,
                 exp2: int | None = None,
                 coeff: int | None = None) -> None:
        """Initialize the RSA Private Key.

        Args:
            mod: The modulus of the keypair.
            pub_exp: The public exponent of the key.
            priv_exp: The private exponent of the key.
            p: The private prime 1.
            q: The private prime 2.
            exp1: CRT Component dmp1. Derived when omitted.
            exp2: CRT Component dmq1. Derived when omitted.
            coeff: CRT Component iqmp. Derived when omitted.
        """
        super().__init__(mod, priv_exp)
        self.pub: RSAPubKey = RSAPubKey(mod, pub_exp)
        self.p: int | None = None
        self.q: int | None = None
        self.exp1: int | None = None
        self.exp2: int | None = None
        self.coeff: int | None = None
        if p and q:
            self.p = p
            self.q = q
            self.exp1 = exp1 if exp1 is not None else priv_exp % (p - 1)
            self.exp2 = exp2 if exp2 is not None else priv_exp % (q - 1)
            self.coeff = coeff if coeff is not None else pow(q, -1, p)

    def c_rsa(self, message: int) -> int:
        """Core RSA transform (RSADP / RSASP1), CRT accelerated when the primes are known.

        Raises:
            ValueError: If the representative is out of range for the key.
        """
        if not self.p or not self.q:
            return super().c_rsa(message)
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        m_1 = pow(message, self.exp1, self.p)
        m_2 = pow(message, self.exp2, self.q)
        h = ((m_1 - m_2) * self.coeff) % self.p
        return m_2 + self.q * h

    def dec_oaep(self, ciphertext: bytes, label: bytes = b"", hashf: str = "sha256") -> bytes:
        """RSAES-OAEP-DECRYPT (RFC 8017 7.1.2).

        Every padding check runs before one combined decision, and all of them fail with the same message.

        Args:
            ciphertext: The ciphertext, `bsize` bytes long.
            label: The label used during encryption.
            hashf: Hash function (sha256, sha384 or sha512).

        Returns:
            The recovered message.

        Raises:
            RuntimeError: If decryption fails for any reason.
        """
        fun, _, hlen, hcap = HASH_TLL[hashf]
        if len(label) > hcap:
            raise RuntimeError("Label too long for the specified hash function")
        if len(ciphertext) != self.bsize:
            raise RuntimeError("Message does not match expected length.")
        if self.bsize < 2 * (hlen + 1):
            raise RuntimeError("Message too short for the specified hash function")
        try:
            em = integer_to_bytes(self.c_rsa(bytes_to_integer(ciphertext)), self.bsize)
        except ValueError:
            raise RuntimeError("Decryption error.") from None
        lh = fun(label).digest()
        valid = em[0] == 0
        mseed = em[1:hlen + 1]
        mdb = em[hlen + 1:]
        seed = xorbytes(mseed, mgf1(mdb, hlen, hashf))
        db = xorbytes(mdb, mgf1(seed, self.bsize - hlen - 1, hashf))
        valid &= hmac.compare_digest(db[:hlen], lh)
        mrkr = None
        for idx in range(hlen, len(db)):
            octet = db[idx]
            if mrkr is None and octet == 1:
                mrkr = idx
            elif mrkr is None and octet != 0:
                valid = False
        if mrkr is None or not valid:
            raise RuntimeError("Decryption error.")
        return db[mrkr + 1:]

    def sign_pkcs1v15(self, message: bytes, hashf: str = "sha256") -> bytes:
        """RSASSA-PKCS1-V1_5-SIGN (RFC 8017 8.2.1). Deterministic for a fixed key and message.

        Args:
            message: The message to sign.
            hashf: Hash function (sha256, sha384 or sha512).

        Returns:
            The signature, exactly `bsize` bytes long.

        Raises:
            RuntimeError: If the key is too short for the encoded digest.
        """
        try:
            em = emsa_pkcs1v15_encode(message, self.bsize, hashf)
        except ValueError as err:
            raise RuntimeError("Hash function too large for current key.") from err
        return integer_to_bytes(self.c_rsa(bytes_to_integer(em)), self.bsize)

    def export_der(self) -> bytes:
        """Serializes the key as DER PKCS#8 PrivateKeyInfo wrapping a two-prime RSAPrivateKey.

        Raises:
            NotImplementedError: If the key has no CRT components.
        """
        if not self.p or not self.q:
            raise NotImplementedError("Export needs the CRT components; CRT-less keys are not supported.")
        interkey = rfc8017.RSAPrivateKey()
        interkey["version"] = 0
        interkey["modulus"] = self.mod
        interkey["publicExponent"] = self.pub.expo
        interkey["privateExponent"] = self.expo
        interkey["prime1"] = self.p
        interkey["prime2"] = self.q
        interkey["exponent1"] = self.exp1
        interkey["exponent2"] = self.exp2
        interkey["coefficient"] = self.coeff
        pkalgo = rfc5208.AlgorithmIdentifier()
        pkalgo["algorithm"] = rfc8017.rsaEncryption
        pkalgo["parameters"] = univ.Null("")
        pkraw = rfc5208.PrivateKeyInfo()
        pkraw["version"] = 0
        pkraw["privateKeyAlgorithm"] = pkalgo
        pkraw["privateKey"] = encoder.encode(interkey)
        return encoder.encode(pkraw)

    @classmethod
    def import_der(cls, data: bytes) -> "RSAPrivKey":
        """Parses DER PKCS#8 PrivateKeyInfo holding a two-prime RSA key.

        Raises:
            IOError: If the structure is not a supported PKCS#8 RSA key.
            pyasn1.error.PyAsn1Error: If the DER itself is broken.
        """
        if not data:
            raise IOError("Empty private key structure.")
        decdata, rest = decoder.decode(data, asn1Spec=rfc5208.PrivateKeyInfo())
        if rest:
            raise IOError("Trailing data after private key structure.")
        if decdata["version"] != 0:
            raise IOError("Unsupported version of private key information wrapper")
        if decdata["privateKeyAlgorithm"]["algorithm"] != rfc8017.rsaEncryption:
            raise IOError("Private Key Algorithm not supported.")
        keydata, _ = decoder.decode(decdata["privateKey"], asn1Spec=rfc8017.RSAPrivateKey())
        if keydata["version"] != 0:
            raise IOError("Multi-prime keys are not supported.")
        pykeyd = localize.encode(keydata)
        _check_numbers(pykeyd["modulus"], pykeyd["publicExponent"])
        if pykeyd["prime1"] <= 1 or pykeyd["prime2"] <= 1 or not 0 < pykeyd["privateExponent"] < pykeyd["modulus"]:
            raise IOError("Private key numbers are out of range.")
        if pykeyd["prime1"] * pykeyd["prime2"] != pykeyd["modulus"]:
            raise IOError("Private key primes do not match the modulus.")
        return cls(pykeyd["modulus"], pykeyd["publicExponent"], pykeyd["privateExponent"], pykeyd["prime1"],
                   pykeyd["prime2"], pykeyd["exponent1"], pykeyd["exponent2"], pykeyd["coefficient"])

    @classmethod
    def generate(cls, size: int, pub_exp: int = 65537, randbits: keygen.RandBits | None = None) -> "RSAPrivKey":
        """Generates a fresh CRT private key together with its public key.

        Args:
            size: The modulus size in bits.
            pub_exp: The public exponent.
            randbits: Source of random integers for the prime search.

        Returns:
            The new private key.
        """
        (n, pub), (_, d, p, q) = keygen.generate_key_pair(size, pub_exp, True, randbits)
        return cls(n, pub, d, p, q)


def _check_numbers(mod: int, expo: int) -> None:
    if mod < 3 or mod % 2 == 0:
        raise IOError("Modulus is not a valid RSA modulus.")
    if not 3 <= expo < mod or expo % 2 == 0:
        raise IOError("Public exponent is not valid for the modulus.")


def emsa_pkcs1v15_encode(message: bytes, bsize: int, hashf: str = "sha256") -> bytes:
    """EMSA-PKCS1-v1_5 encoding (RFC 8017 9.2): `00 01 FF..FF 00 || DER(DigestInfo)`.

    Args:
        message: The message to digest.
        bsize: The intended encoded length, the modulus length in bytes.
        hashf: Hash function (sha256, sha384 or sha512).

    Returns:
        The encoded message.

    Raises:
        ValueError: If `bsize` is too short for the DigestInfo plus 8 bytes of padding.
    """
    hasher, ident, _, _ = HASH_TLL[hashf]
    algid = rfc8017.DigestAlgorithm()
    algid["algorithm"] = ident
    algid["parameters"] = univ.Null("")
    payload = rfc8017.DigestInfo()
    payload["digestAlgorithm"] = algid
    payload["digest"] = hasher(message).digest()
    encoded = encoder.encode(payload)
    if bsize < len(encoded) + 11:
        raise ValueError("Intended encoded message length too short")
    return b"\x00\x01" + b"\xff" * (bsize - len(encoded) - 3) + b"\x00" + encoded


def bytes_to_integer(msg: bytes) -> int:
    """OS2IP: big-endian bytes to a non-negative integer."""
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """I2OSP: non-negative integer to big-endian bytes of exactly `fixedlen` octets.

    Raises:
        OverflowError: If the integer does not fit.
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """Bytewise XOR of two equal-length byte strings."""
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def mgf1(mgfseed: bytes, masklen: int, hashf: str = "sha256") -> bytes:
    """MGF1 mask generation function (RFC 8017 B.2.1).

    Args:
        mgfseed: Seed the mask is generated from.
        masklen: Intended mask length in bytes.
        hashf: Hash function (sha256, sha384 or sha512).

    Returns:
        `masklen` bytes of mask.

    Raises:
        ValueError: If the mask is too long for the hash function.
    """
    fun, _, hlen, _ = HASH_TLL[hashf]
    if masklen > 2**32 * hlen:
        raise ValueError("Mask too long for the specified hash function")
    t = b""
    for cnt in range(ceil(masklen / hlen)):
        t += fun(mgfseed + integer_to_bytes(cnt, 4)).digest()
    return t[:masklen]
