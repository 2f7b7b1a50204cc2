"""
Back-office selectors.

Every interaction point of the seller panel the repricer depends on.
The panel's markup is not a stable contract: when it changes, this is the
module to update, and a full run should be re-validated by hand.
"""

# Listing
LISTING_ROW = "tr.dropi--table-row-product"
LISTING_EMPTY_STATE = ":text('Nenhum produto encontrado')"
LISTING_REMOVED_TAG = (
    "span.dropi--tag-red[data-original-title='O anúncio deste produto no Fornecedor "
    "foi removido, altere o produto para não exibir em sua loja']"
)
LISTING_INTERNAL_LINK = "a[href^='https://app.dropi.com.br/editar/produto/']"
LISTING_EXTERNAL_LINK = "a[href^='https://pt.aliexpress.com/item/']"
LISTING_URL_GLOB = "**/produtos"

# Product detail: prices tab
PRICES_TAB = "a#pills-prices-tab[data-toggle='pill'][data-target='#precos']"
VARIANT_ROW = "tr.quantidade-variacoes"
VARIANT_SKU_INPUT = "input.sku-inputs-verify"
VARIANT_SKU_ID_PREFIX = "sku-custom-"
VARIANT_CALCULATOR_BUTTON = "[id='lucro-{row_id}']"

# Profit calculator
CALCULATOR_FIELDS = {
    "price": "input.valor-produto-aliexpress",
    "shipping": "input.valor-frete-aliexpress",
    "marketing": "input.porcentagem-marketing",
    "markup": "input.base-markup",
    "promo_markup": "input.base-markup-promocional",
}
CALCULATOR_APPLY_BUTTON = "button#aplicarPrecosCalculadora"

# Save flow
MAIN_SAVE_BUTTON = "button.dropi--btn-primary[data-toggle='modal'][data-target='#atualizarProdutoModal']"
IGNORE_COST_LABEL = "p.ml-4:text('Ignorar atualização do custo das variações do produto.')"
FINAL_SAVE_BUTTON = "button.salvarProduto"
