from dataclasses import dataclass
from html import escape


@dataclass(frozen = True)
class EmailTemplate:
    subject: str
    html: str


def purchase_receipt(order_id: str, item_titles: list[str], formatted_total: str) -> EmailTemplate:
    items_html = "".join(f"<li>{escape(title)}</li>" for title in item_titles)
    return EmailTemplate(
        subject = f"Order Confirmation - {order_id}",
        html = (
            "<h1>Thank you for your purchase!</h1>"
            f"<p>Your order <strong>{escape(order_id)}</strong> has been confirmed.</p>"
            "<h2>Items:</h2>"
            f"<ul>{items_html}</ul>"
            f"<p><strong>Total: {escape(formatted_total)}</strong></p>"
            "<p>Your download links arrive in separate emails.</p>"
        ),
    )


def download_ready(product_title: str, download_url: str, expires_in: str) -> EmailTemplate:
    return EmailTemplate(
        subject = f"Download: {product_title}",
        html = (
            "<h1>Your download is ready</h1>"
            f"<p>Click the link below to download <strong>{escape(product_title)}</strong>:</p>"
            f"<p><a href=\"{escape(download_url)}\">Download Now</a></p>"
            f"<p><small>This link expires in {escape(expires_in)}.</small></p>"
            "<p><small>You have a limited number of downloads. Please save your files.</small></p>"
        ),
    )


def failed_payment(order_id: str, retry_url: str) -> EmailTemplate:
    return EmailTemplate(
        subject = f"Payment Failed - Order {order_id}",
        html = (
            "<h1>Payment Failed</h1>"
            f"<p>We were unable to process payment for order <strong>{escape(order_id)}</strong>.</p>"
            f"<p><a href=\"{escape(retry_url)}\">Click here to retry payment</a></p>"
        ),
    )


def refund_processed(order_id: str) -> EmailTemplate:
    return EmailTemplate(
        subject = f"Refund Processed - Order {order_id}",
        html = (
            "<h1>Your refund has been processed</h1>"
            f"<p>The payment for order <strong>{escape(order_id)}</strong> has been refunded.</p>"
            "<p>Download links for this order are no longer active.</p>"
        ),
    )
