from productform import create_app
from productform.lookup import LookupTable
from productform.product.engine import ProductFormEngine

# Create the application instance using the factory
app = create_app()

@app.shell_context_processor
def make_shell_context():
    """
    Makes the lookup table and a ready-to-use engine factory available
    in the 'flask shell' for easy testing.
    """
    lookup = app.extensions['product_lookup']
    return {
        'lookup': lookup,
        'LookupTable': LookupTable,
        'new_engine': lambda: ProductFormEngine(lookup),
    }

if __name__ == '__main__':
    app.run(debug=True)
