import base64
import json
import os
import tempfile
import unittest

from generate_base64_key import encode_key_file, find_key_file, generate_key


class GenerateBase64KeyTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, content):
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_encodes_service_account_file(self):
        info = {'type': 'service_account', 'client_email': 'bot@project.iam.gserviceaccount.com'}
        path = self.write('service-account.json', json.dumps(info))

        self.assertEqual(find_key_file(self.tmp.name), path)
        encoded = encode_key_file(path)
        self.assertEqual(json.loads(base64.b64decode(encoded)), info)
        self.assertEqual(generate_key([path]), 0)

    def test_rejects_invalid_files(self):
        bad_json = self.write('service.json', '{not json')
        not_a_key = self.write('service2.json', '{"type": "user"}')

        with self.assertRaises(ValueError):
            encode_key_file(bad_json)
        with self.assertRaises(ValueError):
            encode_key_file(not_a_key)
        self.assertEqual(generate_key([bad_json]), 1)

    def test_no_key_file(self):
        self.assertIsNone(find_key_file(self.tmp.name))


if __name__ == '__main__':
    unittest.main()
