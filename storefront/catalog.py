"""Static sample catalog.

Filtering and search are linear scans over ``PRODUCTS``.
"""

from .models.product import Product

PRODUCTS = [
    Product(
        id=1,
        name='Elegant Green Silk Saree with Gold Border',
        price=1999,
        sale_price=999,
        category='silk',
        image='/static/images/products/green-silk-gold-border.png',
        on_sale=True,
        description='Elevate your traditional look with this stunning green silk saree, '
                    'featuring a luxurious golden border that adds a royal touch.',
        tags=['silk', 'wedding', 'festive'],
        colors=['green', 'gold'],
    ),
    Product(
        id=2,
        name='Kanjivaram Silk Saree',
        price=1899,
        sale_price=1299,
        category='silk',
        image='/static/images/products/kanjivaram-silk.png',
        on_sale=True,
        description='A beautiful Kanjivaram silk saree with intricate designs and vibrant colors.',
        tags=['silk', 'wedding', 'traditional'],
        colors=['red', 'gold'],
    ),
    Product(
        id=3,
        name='Handloom Cotton Saree',
        price=1499,
        sale_price=999,
        category='cotton',
        image='/static/images/products/handloom-cotton.png',
        on_sale=True,
        description='Comfortable and elegant handloom cotton saree for daily wear.',
        tags=['cotton', 'casual', 'daily'],
        colors=['blue', 'white'],
    ),
    Product(
        id=4,
        name='Designer Embroidered Saree',
        price=1899,
        sale_price=None,
        category='designer',
        image='/static/images/products/designer-embroidered.png',
        on_sale=False,
        description='Exquisite designer saree with intricate embroidery work.',
        tags=['designer', 'party', 'festive'],
        colors=['purple', 'silver'],
    ),
    Product(
        id=5,
        name='Linen Handwoven Saree',
        price=1699,
        sale_price=None,
        category='cotton',
        image='/static/images/products/linen-handwoven.png',
        on_sale=False,
        description='Lightweight and breathable linen saree for a comfortable yet elegant look.',
        tags=['linen', 'casual', 'summer'],
        colors=['beige', 'brown'],
    ),
    Product(
        id=6,
        name='Patola Silk Saree',
        price=2099,
        sale_price=1899,
        category='silk',
        image='/static/images/products/patola-silk.png',
        on_sale=True,
        description='Traditional Patola silk saree with geometric patterns.',
        tags=['silk', 'traditional', 'festive'],
        colors=['maroon', 'gold'],
    ),
]

CATEGORIES = {
    'silk': 'Silk Sarees',
    'cotton': 'Cotton Sarees',
    'designer': 'Designer Sarees',
}

SORT_OPTIONS = ('featured', 'price-low-high', 'price-high-low', 'newest')


def get_product(product_id):
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    return None


def filter_products(categories=None, occasions=None, colors=None,
                    price_range=None, on_sale=False, sort='featured'):
    """Products matching every given filter, in the requested order."""
    results = []
    for product in PRODUCTS:
        if categories and product.category not in categories:
            continue
        if occasions and not any(tag in occasions for tag in product.tags):
            continue
        if colors and not any(color in colors for color in product.colors):
            continue
        if price_range:
            low, high = price_range
            if product.current_price < low or product.current_price > high:
                continue
        if on_sale and not product.on_sale:
            continue
        results.append(product)

    if sort == 'price-low-high':
        results.sort(key=lambda p: p.current_price)
    elif sort == 'price-high-low':
        results.sort(key=lambda p: p.current_price, reverse=True)
    elif sort == 'newest':
        results.sort(key=lambda p: p.id, reverse=True)
    return results


def search_products(query):
    """Case-insensitive match on name, description, category, tags and colors."""
    query = (query or '').strip().lower()
    if not query:
        return []

    def matches(product):
        fields = [product.name, product.description, product.category]
        fields.extend(product.tags)
        fields.extend(product.colors)
        return any(query in value.lower() for value in fields)

    return [product for product in PRODUCTS if matches(product)]
