from unittest.mock import patch

import send_test_event


def test_main_sends_signed_sample_event():
    with patch("send_test_event.deliver_event") as mock_deliver:
        mock_deliver.return_value = (True, 200, "")

        exit_code = send_test_event.main(
            ["--url", "http://localhost:3000/webhooks/products", "--secret", "s3cret"]
        )

    assert exit_code == 0
    url, event, secret, timeout = mock_deliver.call_args[0]
    assert url == "http://localhost:3000/webhooks/products"
    assert event.event_type == "product.created"
    assert event.product.sku == "SON-WH1-XM5-BLK"
    assert secret == "s3cret"
    assert timeout == 30


def test_main_reports_failure():
    with patch("send_test_event.deliver_event") as mock_deliver:
        mock_deliver.return_value = (False, 401, "Invalid signature")

        assert send_test_event.main(["--event-type", "product.deleted"]) == 1
