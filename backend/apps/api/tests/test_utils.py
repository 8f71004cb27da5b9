import unittest
from rest_framework import status
from apps.api.utils import error_response, service_error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "Product not found", {"id": "5"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            resp.data,
            {
                "error": {
                    "code": "NOT_FOUND",
                    "message": "Product not found",
                    "status": 404,
                    "details": {"id": "5"},
                }
            },
        )

    def test_code_is_normalised_and_unknown_defaults_to_400(self):
        resp = error_response(" custom ", "oops")
        self.assertEqual(resp.data["error"]["code"], "CUSTOM")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Not enough stock available",
            hint="Lower the quantity",
            extra={"available": 2},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Lower the quantity")
        self.assertEqual(payload["extra"], {"available": 2})

    def test_rejects_blank_message(self):
        with self.assertRaises(ValueError):
            error_response("CONFLICT", "   ")
        with self.assertRaises(TypeError):
            error_response(409, "Conflict")

    def test_service_error_response_unpacks_tuple(self):
        resp = service_error_response(("CONFLICT", "Product is out of stock", {"productId": "2"}))
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["details"], {"productId": "2"})
