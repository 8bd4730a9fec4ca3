# graph/nodes/login_node.py
from graph.context import RunContext
from graph.state import RunState


async def login_node(state: RunState, ctx: RunContext = None) -> dict:
    """ログインフォームに認証情報を入力して送信するノード"""
    browser, selectors = ctx.browser, ctx.selectors

    await browser.navigate(ctx.urls["sign_in"])
    form = await browser.find_element(selectors["login_form"])

    login_field = await browser.find_element(selectors["login_field"], form)
    await browser.send_keys(login_field, ctx.credentials.login)

    password_field = await browser.find_element(selectors["password_field"], form)
    await browser.send_keys(password_field, ctx.credentials.password)

    button = await browser.find_element(selectors["login_button"], form)
    await browser.click(button)

    # クライアント側のリダイレクト待ち
    await ctx.clock.wait("login_settle")
    return {}
