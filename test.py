import unittest
import doctest
import zkdkim
import zkdkim.bignum
import zkdkim.canonicalization
import zkdkim.crypto
import zkdkim.prover
import zkdkim.util
from zkdkim.tests import test_suite

for module in (zkdkim, zkdkim.bignum, zkdkim.canonicalization, zkdkim.crypto,
               zkdkim.prover, zkdkim.util):
    doctest.testmod(module)
unittest.TextTestRunner().run(test_suite())
