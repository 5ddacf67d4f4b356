import unittest

from davshare import config
from davshare import errors


class ParseArgsTest(unittest.TestCase):
    def test_defaults(self):
        conf = config.parse_args(['-dir', '/srv'])
        self.assertEqual('/srv', conf.root)
        self.assertEqual('', conf.host)
        self.assertEqual(5005, conf.port)
        self.assertFalse(conf.https)
        self.assertEqual('cert.pem', conf.cert_file)
        self.assertEqual('key.pem', conf.key_file)
        self.assertEqual('', conf.user)
        self.assertEqual('', conf.password)
        self.assertFalse(conf.read_only)
        self.assertFalse(conf.show_hidden)
        self.assertEqual(1, conf.verbose)

    def test_all_flags(self):
        conf = config.parse_args([
            '-dir', '/srv', '-port', '127.0.0.1:8443', '-https-mode',
            '-https-cert-file', 'c.pem', '-https-key-file', 'k.pem',
            '-user', 'alice', '-password', 'pw', '-read-only',
            '-show-hidden', '-verbose', '4'])
        self.assertEqual(('127.0.0.1', 8443), (conf.host, conf.port))
        self.assertTrue(conf.https)
        self.assertEqual(('c.pem', 'k.pem'), (conf.cert_file, conf.key_file))
        self.assertEqual(('alice', 'pw'), (conf.user, conf.password))
        self.assertTrue(conf.read_only)
        self.assertTrue(conf.show_hidden)
        self.assertEqual(4, conf.verbose)

    def test_double_dash_flags(self):
        conf = config.parse_args(['--dir', '/srv', '--read-only'])
        self.assertEqual('/srv', conf.root)
        self.assertTrue(conf.read_only)

    def test_missing_dir(self):
        self.assertRaises(errors.ConfigurationError, config.parse_args, [])

    def test_empty_port(self):
        self.assertRaises(errors.ConfigurationError, config.parse_args,
                          ['-dir', '/srv', '-port', ''])

    def test_immutable(self):
        conf = config.parse_args(['-dir', '/srv'])
        self.assertRaises(AttributeError, setattr, conf, 'read_only', True)


class SplitAddressTest(unittest.TestCase):
    def test_forms(self):
        self.assertEqual(('', 5005), config.split_address('5005'))
        self.assertEqual(('', 5005), config.split_address(':5005'))
        self.assertEqual(('localhost', 80),
                         config.split_address('localhost:80'))
        self.assertEqual(('::1', 8080), config.split_address('[::1]:8080'))

    def test_invalid(self):
        for address in ['', 'abc', 'host:', 'host:99999']:
            self.assertRaises(errors.ConfigurationError,
                              config.split_address, address)


if __name__ == "__main__":
    unittest.main()
