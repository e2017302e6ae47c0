import os
import logging
from flask import Flask, jsonify, session, request, abort
from werkzeug.exceptions import HTTPException
from db import get_connection, init_db, seed_sample_games
from gameverse_lib import (
    CartLedger, UnknownEntryError, SqliteCatalog,
    add_entry, set_quantity, remove, increment, decrement,
    calculate_cart_total, cart_item_count, featured_entries,
    format_eur, checkout_items, report_checkout, default_checkout_handler,
    setup_logger,
)

setup_logger()
logger = logging.getLogger("gameverse.app")

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "change_this_secret_key")  # change for production
# unknown ids answer 404 instead of being ignored
app.config["STRICT_CART"] = os.environ.get("GAMEVERSE_STRICT_CART") == "1"
app.config["CHECKOUT_HANDLER"] = default_checkout_handler()

catalog = SqliteCatalog(get_connection)

# home header
GREETING = os.environ.get("GAMEVERSE_GREETING", "¡Hola, GamerXtreme!")
SUBTITLE = "Listo para jugar hoy?"

# DB INIT
with app.app_context():
    init_db()
    seed_sample_games()


# HELPERS
def get_cart() -> CartLedger:
    return CartLedger.from_session(session.get("cart", []), catalog)


def save_cart(ledger: CartLedger):
    session["cart"] = ledger.to_session()


def strict() -> bool:
    return bool(app.config.get("STRICT_CART"))


def mutate_cart(transition, game_id, *args):
    """Apply one ledger transition and store the new cart wholesale."""
    ledger = get_cart()
    try:
        ledger = transition(ledger, game_id, *args, strict=strict())
    except UnknownEntryError as e:
        abort(404, description=str(e))
    save_cart(ledger)
    return jsonify(cart_view(ledger))


def entry_view(entry) -> dict:
    data = entry.to_dict()
    data["price_display"] = format_eur(entry.price)
    return data


def cart_view(ledger: CartLedger) -> dict:
    total = calculate_cart_total(ledger)
    return {
        "items": [
            {
                "id": item.entry_id,
                "name": item.entry.name,
                "price": str(item.entry.price),
                "quantity": item.quantity,
                "subtotal": str(item.subtotal),
            }
            for item in ledger
        ],
        "total": str(total),
        "total_display": format_eur(total),
        "cart_count": cart_item_count(ledger),
    }


def parse_quantity(payload):
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object with a quantity.")
    value = payload.get("quantity")
    # bool is an int subclass; floats are never truncated
    if not isinstance(value, int) or isinstance(value, bool):
        abort(400, description="Quantity must be an integer.")
    return value


@app.errorhandler(HTTPException)
def handle_http_error(e):
    response = jsonify({"error": e.description})
    response.status_code = e.code
    return response


# PUBLIC ROUTES

@app.route("/")
def index():
    games = catalog.get_all_entries()
    cart = get_cart()

    return jsonify({
        "title": "GameVerse",
        "greeting": GREETING,
        "subtitle": SUBTITLE,
        "featured": [entry_view(g) for g in featured_entries(games)],
        "catalog": [entry_view(g) for g in games],
        "cart_count": cart_item_count(cart),
    })


@app.route("/game/<int:game_id>")
def game_detail(game_id):
    game = catalog.get_entry(game_id)
    if game is None:
        abort(404, description="Game not found.")
    return jsonify(entry_view(game))


@app.route("/add-to-cart/<int:game_id>", methods=["POST"])
def add_to_cart(game_id):
    game = catalog.get_entry(game_id)
    if game is None:
        abort(404, description="Game not found.")

    cart = add_entry(get_cart(), game)
    save_cart(cart)
    logger.info("Added %s to cart", game.name)
    return jsonify(cart_view(cart))


# CART

@app.route("/cart")
def cart():
    return jsonify(cart_view(get_cart()))


@app.route("/cart/<int:game_id>/quantity", methods=["POST"])
def cart_set_quantity(game_id):
    quantity = parse_quantity(request.get_json(silent=True))
    return mutate_cart(set_quantity, game_id, quantity)


@app.route("/cart/<int:game_id>/increment", methods=["POST"])
def cart_increment(game_id):
    return mutate_cart(increment, game_id)


@app.route("/cart/<int:game_id>/decrement", methods=["POST"])
def cart_decrement(game_id):
    return mutate_cart(decrement, game_id)


@app.route("/cart/<int:game_id>/remove", methods=["POST"])
def cart_remove(game_id):
    return mutate_cart(remove, game_id)


@app.route("/cart/clear", methods=["POST"])
def clear_cart():
    cart = CartLedger()
    save_cart(cart)
    return jsonify(cart_view(cart))


# CHECKOUT

@app.route("/checkout", methods=["POST"])
def checkout():
    cart = get_cart()

    if len(cart) == 0:
        abort(400, description="Your cart is empty.")

    total = report_checkout(
        calculate_cart_total(cart),
        checkout_items(cart),
        handler=app.config["CHECKOUT_HANDLER"],
    )

    save_cart(CartLedger())

    return jsonify({
        "total": str(total),
        "total_display": format_eur(total),
        "message": "Checkout complete.",
    })


if __name__ == "__main__":
    app.run(debug=True)
