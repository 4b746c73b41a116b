import pytest


SEARCH_PAGE = """
<html><head><title>sfbay bicycles</title></head>
<body>
  <div class="buttons">
    <a class="prev" href="/search/bia?s=0">prev</a>
    <a class="next" href="/search/bia?s=120">next</a>
  </div>
  <ul class="rows">
    <li class="result-row">
      <a class="result-image gallery" data-ids="3:00a0a_abc123,1:00b0b_def456" href="/eby/bik/1.html"></a>
      <div class="result-info">
        <time class="result-date" datetime="2021-03-01 10:15">Mar 1</time>
        <h3 class="result-heading"><a href="https://sfbay.craigslist.org/eby/bik/1.html">Mountain Bike</a></h3>
        <span class="result-meta">
          <span class="result-price">$300</span>
          <span class="result-hood"> (oakland) </span>
        </span>
      </div>
    </li>
    <li class="result-row">
      <a class="result-image gallery" data-ids="3:00a0a_abc123" href="/sfc/bik/2.html"></a>
      <div class="result-info">
        <time class="result-date" datetime="2021-03-01 11:00">Mar 1</time>
        <h3 class="result-heading"><a href="https://sfbay.craigslist.org/sfc/bik/2.html">mountain  BIKE</a></h3>
        <span class="result-meta">
          <span class="result-price">$300</span>
          <span class="result-hood">(Oakland)</span>
        </span>
      </div>
    </li>
    <li class="result-row">
      <a class="result-image empty" href="/pen/bik/3.html"></a>
      <div class="result-info">
        <h3 class="result-heading"><a href="/pen/bik/3.html">Road Car</a></h3>
        <span class="result-meta">
          <span class="nearby" title="pen"> (palo alto) </span>
        </span>
      </div>
    </li>
  </ul>
</body></html>
"""

NEXT_PAGE = """
<html><body>
  <div class="buttons"><a class="prev" href="/search/bia?s=0">prev</a></div>
  <ul class="rows">
    <li class="result-row">
      <div class="result-info">
        <h3 class="result-heading"><a href="/sby/bik/4.html">BIKE rack</a></h3>
        <span class="result-meta"><span class="result-price">$20</span></span>
      </div>
    </li>
    <li class="result-row">
      <a class="result-image gallery" data-ids="3:00a0a_abc123"></a>
      <div class="result-info">
        <h3 class="result-heading"><a href="/eby/bik/5.html">Mountain Bike</a></h3>
        <span class="result-meta">
          <span class="result-price">$300</span>
          <span class="result-hood">(oakland)</span>
        </span>
      </div>
    </li>
  </ul>
</body></html>
"""


@pytest.fixture
def search_page() -> str:
    return SEARCH_PAGE


@pytest.fixture
def next_page() -> str:
    return NEXT_PAGE
