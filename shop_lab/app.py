"""ShopLab: small storefront for CheckoutScan manual runs.

Serves pages with the checkout signals the scanner looks for (analytics
events, payment SDK calls, cart endpoints, checkout links and forms) so
the CLI can be pointed at http://127.0.0.1:5000/ and checked by eye.
"""

from flask import Flask, Response, render_template_string

app = Flask(__name__, static_folder=None)


# ── Shared HTML layout ──────────────────────────────────────────

_LAYOUT = """<!DOCTYPE html>
<html><head><title>ShopLab | {{ title }}</title>
<style>
body{font-family:monospace;background:#111;color:#0f0;max-width:900px;margin:0 auto;padding:2rem}
a{color:#0ff}h1{color:#fc0}
form{background:#1a1a1a;padding:1rem;border:1px solid #333;margin:1rem 0}
button{background:#060;color:#fff;border:none;padding:0.5rem 1rem;cursor:pointer}
</style>
{{ head|safe }}
</head>
<body>
<h1>ShopLab</h1>
<h2>{{ title }}</h2>
{{ content|safe }}
</body></html>
"""


def page(title, content, head=""):
    return render_template_string(_LAYOUT, title=title, content=content, head=head)


# ══════════════════════════════════════════════════════════════════
#  HOME: every kind of checkout signal
# ══════════════════════════════════════════════════════════════════

@app.route("/")
def home():
    head = """
    <script src="/static/shop.js"></script>
    <script>
      window.dataLayer = window.dataLayer || [];
      function gtag(){dataLayer.push(arguments);}
      document.addEventListener('click', function () {
        gtag('event', 'begin_checkout', {currency: 'EUR'});
      });
    </script>
    """
    return page("Home", """
    <ul>
        <li><a href="/cart">View <b>cart</b></a></li>
        <li><a href="/checkout?step=1">Checkout</a></li>
        <li><a href="/about">About</a></li>
    </ul>

    <form action="/cart/add" method="post">
        <input type="hidden" name="id" value="42">
        <button type="submit">Add to cart</button>
    </form>
    """, head=head)


@app.route("/static/shop.js")
def shop_js():
    js = """
    var checkoutUrl = '/checkout';
    var stripe = Stripe('pk_test_shoplab');
    function addToCart(id) {
      return fetch('/cart/add.js', {method: 'POST', body: JSON.stringify({id: id})});
    }
    function pay() { stripe.redirectToCheckout({sessionId: 'cs_test'}); }
    """
    return Response(js, mimetype="application/javascript")


# ══════════════════════════════════════════════════════════════════
#  Failure cases
# ══════════════════════════════════════════════════════════════════

@app.route("/broken")
def broken():
    head = '<script src="/static/missing.js"></script>'
    return page("Broken", "<p>References a script that returns 404.</p>", head=head)


@app.route("/plain")
def plain():
    return page("Plain", """
    <script>console.log('hello');</script>
    <p>No commerce here.</p>
    <a href="/about">About</a>
    """)


@app.route("/about")
def about():
    return page("About", "<p>ShopLab is a test fixture.</p>")


# ══════════════════════════════════════════════════════════════════
#  Main
# ══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    print("\n  ShopLab starting on http://127.0.0.1:5000\n")
    app.run(host="127.0.0.1", port=5000, debug=True)
