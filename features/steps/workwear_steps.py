"""Step definitions for the Mammoth Workwear storefront."""

from behave import given, then, when

from harness_tools.common import trace
from webtests.ui_testing.pages import MammothWorkwearPage


@given("I am on the Mammoth Workwear home page")
def step_open_home_page(context):
    context.run(context.world.page_object(MammothWorkwearPage).open())


@when('I click navigation item "{link_title}"')
def step_click_navigation_item(context, link_title):
    workwear = context.world.page_object(MammothWorkwearPage)
    context.run(workwear.click_navigation_item(link_title))
    trace("Navigated to", context.world.page.url)


@when('I click product item "{product_title}"')
@then('I click product item "{product_title}"')
def step_click_product_item(context, product_title):
    workwear = context.world.page_object(MammothWorkwearPage)
    context.run(workwear.click_product_item(product_title))


@then('I should see product detail with title "{page_title}"')
def step_product_title(context, page_title):
    workwear = context.world.page_object(MammothWorkwearPage)
    context.run(workwear.title_contains(page_title))
