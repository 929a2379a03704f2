from form_submitter import from_url

session = from_url("https://www.google.com")
session.set_params({"q": "John 3:16"})
res = session.submit()
print(res.text)
