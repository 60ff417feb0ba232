"""Step definitions for the Google search smoke scenarios."""

from behave import then, when

from webtests.ui_testing.pages import GoogleSearchPage


@when('I search Google for "{search_query}"')
def step_search(context, search_query):
    search = context.world.page_object(GoogleSearchPage)
    context.run(search.open())
    context.run(search.perform_search(search_query))


@then('I should see "{keywords}" in the results')
def step_result_link(context, keywords):
    search = context.world.page_object(GoogleSearchPage)
    context.run(search.wait_for_result_link(keywords))


@then("I should see some results")
def step_some_results(context):
    search = context.world.page_object(GoogleSearchPage)
    assert context.run(search.result_count()) > 0
